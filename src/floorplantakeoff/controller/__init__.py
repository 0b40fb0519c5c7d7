"""
The CONTROLLER layer interprets pointer and keyboard input and applies it to
the model. It owns the interaction mode and the selection.
"""
