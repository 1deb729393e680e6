"""GUI adapter layer.

This package provides thin Qt-shaped implementations of the controller ports.

Notes
-----
Adapters exist to:
- keep controller code free of widget details,
- schedule controller coroutines on the Qt event loop,
- translate domain notices into Qt message boxes and status text.
"""
