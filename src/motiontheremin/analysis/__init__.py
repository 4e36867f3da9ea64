"""Signal processing helpers (smoothing, position tracking, rate, mapping).

Modules here are pure Python/NumPy and know nothing about sinks, timers or
Qt, so the pipeline, command-line tools and tests can reuse them directly.
"""
