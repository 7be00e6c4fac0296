import sys
import logging
from collections import namedtuple

from ..errors import TerminalControlError


logger = logging.getLogger("zi")


class Geometry(namedtuple("Geometry", ["rows", "columns"])):
    """The usable terminal area, as 0-based maximum row and column.

    The OS reports a 1-based size. That is converted once, when the
    geometry is obtained, so that the rest of the code can assume
    0-based indexing.
    """

    __slots__ = ()

    @classmethod
    def from_size(cls, lines, columns):
        if lines <= 0 or columns <= 0:
            raise TerminalControlError(
                f"Invalid terminal size reported: {lines}x{columns}"
            )
        return cls(lines - 1, columns - 1)

    @property
    def width(self):
        """The number of columns of the terminal."""
        return self.columns + 1


class TerminalContext:
    """Context manager that puts the terminal in raw mode.

    Instantiating this class produces a class corresponding with the
    current platform. On entering, the terminal attributes are stored,
    and on exit they are restored, also when an error occurred.
    """

    def __new__(cls, **kwargs):
        # Select terminal class
        if sys.platform.startswith("win"):
            raise TerminalControlError("zi needs a POSIX terminal (termios).")
        from ._context_unix import UnixTerminalContext as TerminalContext

        return super().__new__(TerminalContext)

    def __init__(self, stdin=None, stdout=None):

        self._entered = False
        self.snapshot = None
        self.geometry = None

        stdin = stdin or sys.__stdin__
        stdout = stdout or sys.__stdout__
        try:
            self.fd_in = stdin.fileno()
            self.fd_out = stdout.fileno()
        except (AttributeError, OSError, ValueError) as err:
            raise TerminalControlError(f"stdin/stdout have no file descriptor: {err}")

        # Warn if it looks like this is not a terminal
        if not stdin.isatty():
            sys.stderr.write(f"Warning: Input is not a tty: {stdin}\n")
            sys.stderr.flush()

    def __enter__(self):
        self.enter()
        return self

    def __exit__(self, *args):
        self.leave()

    def enter(self):
        """Put the terminal in raw mode and obtain its size.

        Returns a tuple (snapshot, geometry). Raises TerminalControlError
        if anything fails. In that case the terminal is left as it was.
        """
        if self._entered:
            raise TerminalControlError("Can only enter the terminal context once.")
        self.snapshot = self._store_terminal_mode()
        self._entered = True
        try:
            self._set_terminal_mode()
            self.geometry = self._get_geometry()
        except BaseException:
            self.leave()
            raise
        logger.info(f"entered raw mode, geometry {self.geometry}")
        return self.snapshot, self.geometry

    def leave(self):
        """Restore the terminal to the state it was in before entering.

        Safe to call multiple times, and when the context was never entered.
        """
        if not self._entered:
            return
        self._entered = False
        snapshot, self.snapshot = self.snapshot, None
        try:
            self._reset_terminal_mode(snapshot)
        except Exception as err:
            logger.error(f"Could not restore terminal: {err}")
        else:
            logger.info("left raw mode")

    # For subclasses to implement

    def _store_terminal_mode(self):
        raise NotImplementedError()

    def _set_terminal_mode(self):
        raise NotImplementedError()

    def _reset_terminal_mode(self, snapshot):
        raise NotImplementedError()

    def _get_geometry(self):
        raise NotImplementedError()
