"""Qt integration for hosts built with PySide6.

:mod:`qt_timer` drives the playback scheduler from a ``QTimer`` and
:mod:`control_bridge` re-emits control updates as Qt signals so widgets and
audio back-ends can subscribe with ordinary signal/slot connections. The core
packages never import Qt themselves.
"""
