"""Motion-driven theremin control core.

Turns noisy device-motion readings into bounded ``(pitch, volume)`` control
pairs and records/replays performances of those pairs. Audio synthesis and
rendering live outside this package; they plug in as sinks.
"""

__version__ = "0.1.0"
