"""Sensor-source parsers.

:mod:`motion` turns JSON lines emitted by a device bridge (browser
DeviceMotion/DeviceOrientation events, a phone app, a logger) into
:class:`~motiontheremin.models.RawSample` and
:class:`~motiontheremin.models.OrientationSample` objects.
"""
