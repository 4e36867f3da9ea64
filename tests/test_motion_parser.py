from __future__ import annotations

import json
import logging

from motiontheremin.core.live_stream import stream_lines
from motiontheremin.models import OrientationSample, RawSample
from motiontheremin.sensors.motion import parse_line, sample_from_mapping


def test_parse_acceleration_line() -> None:
    sample = parse_line(json.dumps({"x": 0.1, "y": 9.8, "z": -0.2}))
    assert sample == RawSample(0.1, 9.8, -0.2)
    assert sample.is_valid()


def test_null_components_are_preserved_for_the_pipeline_to_reject() -> None:
    sample = parse_line('{"x": null, "y": 9.8, "z": 0}')
    assert isinstance(sample, RawSample)
    assert sample.x is None
    assert not sample.is_valid()


def test_boolean_components_are_rejected(caplog) -> None:
    assert parse_line('{"x": true, "y": 9.8, "z": 0}') is None
    assert parse_line('{"alpha": 0, "beta": false, "gamma": 1}') is None
    assert "must be a number" in caplog.text


def test_parse_orientation_line() -> None:
    sample = parse_line('{"alpha": 10, "beta": 45.5, "gamma": -12}')
    assert sample == OrientationSample(10.0, 45.5, -12.0)


def test_explicit_type_wins_over_key_inference() -> None:
    sample = sample_from_mapping({"type": "orientation", "beta": 1.0, "gamma": 2.0, "x": 5})
    assert isinstance(sample, OrientationSample)
    assert sample.alpha is None


def test_bad_lines_are_skipped_with_a_warning(caplog) -> None:
    caplog.set_level(logging.WARNING)
    assert parse_line("not-json") is None
    assert parse_line("[1, 2, 3]") is None
    assert parse_line('{"foo": 1}') is None
    assert parse_line('{"x": "fast", "y": 1, "z": 2}') is None
    assert parse_line("   ") is None
    assert len(caplog.records) == 4


def test_stream_lines_delivers_parsed_samples_and_survives_errors(caplog) -> None:
    lines = [
        '{"x": 0, "y": 9.8, "z": 0}\n',
        "\n",
        "garbage\n",
        '{"x": 1, "y": 9.8, "z": 0}\n',
        '{"x": 2, "y": 9.8, "z": 0}\n',
    ]
    received: list[RawSample] = []

    def callback(sample: RawSample) -> None:
        if sample.x == 1:
            raise RuntimeError("sink exploded")
        received.append(sample)

    delivered = stream_lines(lines, parse_line, callback)

    assert delivered == 2
    assert [s.x for s in received] == [0.0, 2.0]
    assert any("sink exploded" in rec.getMessage() for rec in caplog.records)
