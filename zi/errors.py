"""
The exceptions that zi raises.

Only failures of the terminal session and the quit signal cross the
boundaries between the components. Everything else is handled where
it is detected, or wrapped in a FatalRuntimeError by the main loop.
"""


class ZiError(Exception):
    """Base class for zi errors."""


class TerminalControlError(ZiError):
    """Raw mode could not be entered, or the geometry could not be obtained."""


class UnimplementedModeError(ZiError):
    """A key was pressed in a mode whose behavior is not implemented."""


class InputReadTransientError(ZiError):
    """A read from stdin produced no byte. Never leaves the InputReader."""


class FatalRuntimeError(ZiError):
    """Unexpected failure in the render/dispatch loop."""


class QuitRequested(Exception):
    """Raised by the dispatcher when the user asks to quit."""
