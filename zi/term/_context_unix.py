import os
import tty  # Unix
import signal
import termios  # Unix

from ._context import Geometry, TerminalContext
from ..errors import TerminalControlError


# Return from a read as soon as one byte is available, or after
# VTIME tenths of a second with nothing.
VMIN = 0
VTIME = 1


def patch_iflag(attrs: int) -> int:
    return attrs & ~(
        # Disable XON/XOFF flow control on output and input.
        # (Don't capture Ctrl-S and Ctrl-Q.)
        termios.IXON
        | termios.IXOFF
        # Don't translate carriage return into newline on input.
        | termios.ICRNL
        | termios.INLCR
        | termios.IGNCR
        # No break or parity handling, and don't strip the 8th bit.
        | termios.IGNBRK
        | termios.BRKINT
        | termios.PARMRK
        | termios.ISTRIP
    )


def patch_oflag(attrs: int) -> int:
    # No output processing, so "\n" is not turned into "\r\n".
    return attrs & ~termios.OPOST


def patch_lflag(attrs: int) -> int:
    return attrs & ~(
        # Don't echo keypresses.
        termios.ECHO
        | termios.ECHONL
        # Read by byte, not by line.
        | termios.ICANON
        # Ctrl-C and Ctrl-Z are just keys.
        | termios.ISIG
        # So is Ctrl-V.
        | termios.IEXTEN
    )


def patch_cflag(attrs: int) -> int:
    return (attrs & ~(termios.CSIZE | termios.PARENB)) | termios.CS8


def make_raw(attrs):
    """Get a raw-mode copy of the given termios attribute list."""
    newattr = list(attrs)
    newattr[tty.IFLAG] = patch_iflag(newattr[tty.IFLAG])
    newattr[tty.OFLAG] = patch_oflag(newattr[tty.OFLAG])
    newattr[tty.CFLAG] = patch_cflag(newattr[tty.CFLAG])
    newattr[tty.LFLAG] = patch_lflag(newattr[tty.LFLAG])
    cc = list(newattr[tty.CC])
    cc[termios.VMIN] = VMIN
    cc[termios.VTIME] = VTIME
    newattr[tty.CC] = cc
    return newattr


class UnixTerminalContext(TerminalContext):

    def _store_terminal_mode(self):
        try:
            return termios.tcgetattr(self.fd_in)
        except termios.error as err:
            raise TerminalControlError(f"Cannot get terminal attributes: {err}")

    def _check_foreground(self):

        # This was from Textual's start_application_mode()
        def _stop_again(*_) -> None:
            """Signal handler that will put the application back to sleep."""
            os.kill(os.getpid(), signal.SIGSTOP)

        if not os.isatty(self.fd_in):
            return

        # Set up handlers to ensure that, if there's a SIGTTOU or a SIGTTIN,
        # we go back to sleep.
        signal.signal(signal.SIGTTOU, _stop_again)
        signal.signal(signal.SIGTTIN, _stop_again)
        try:
            # A NOP tcsetattr. If we were started in the background we are
            # not allowed to change the terminal, and better find out now.
            termios.tcsetattr(
                self.fd_in, termios.TCSANOW, termios.tcgetattr(self.fd_in)
            )
        except termios.error as err:
            raise TerminalControlError(f"Cannot control the terminal: {err}")
        finally:
            signal.signal(signal.SIGTTOU, signal.SIG_DFL)
            signal.signal(signal.SIGTTIN, signal.SIG_DFL)

    def _set_terminal_mode(self):
        self._check_foreground()
        try:
            newattr = make_raw(termios.tcgetattr(self.fd_in))
            termios.tcsetattr(self.fd_in, termios.TCSAFLUSH, newattr)
        except termios.error as err:
            raise TerminalControlError(f"Cannot enter raw mode: {err}")

    def _reset_terminal_mode(self, snapshot):
        if snapshot is not None:
            termios.tcsetattr(self.fd_in, termios.TCSAFLUSH, snapshot)

    def _get_geometry(self):
        try:
            size = os.get_terminal_size(self.fd_out)
        except OSError as err:
            raise TerminalControlError(f"Cannot get terminal size: {err}")
        return Geometry.from_size(size.lines, size.columns)
