"""Helpers for feeding line-oriented sensor streams into the pipeline."""

from typing import Any, Callable, Iterable
import logging

logger = logging.getLogger(__name__)


def stream_lines(
    lines: Iterable[str],
    parser: Callable[[str], Any],
    callback: Callable[[Any], None],
) -> int:
    """
    Parse incoming lines and forward decoded samples to a callback.

    Blank lines are skipped. Parser and callback failures are logged and the
    line is skipped so one bad reading never ends the stream. Returns the
    number of samples delivered to ``callback``.
    """
    delivered = 0
    for raw_line in lines:
        line = raw_line.strip()
        if not line:
            continue

        try:
            sample = parser(line)
        except Exception as exc:  # pragma: no cover - defensive guard
            logger.exception("Error parsing line %r: %s", line, exc)
            continue

        if sample is None:
            continue

        try:
            callback(sample)
        except Exception as exc:
            logger.exception("Error in stream callback for sample %r: %s", sample, exc)
            continue
        delivered += 1
    return delivered
