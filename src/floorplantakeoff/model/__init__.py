"""
The MODEL layer contains pure data structures and business logic.
It has NO knowledge of the GUI (Qt) or the rendering.
It deals with Geometry, Calibration, Validation and I/O.
"""
