"""
Utilities to work with the terminal and escape sequences.

This works directly on the file descriptors and with vt100 escape
sequences. We don't use curses. The terminal is put in raw mode, so
that every byte typed reaches us, and nothing we write is altered on
the way out.

The code for setting the terminal mode is platform specific. This is
why we have a base TerminalContext class, with an implementation for
Unix (termios).
"""

from ._context import TerminalContext, Geometry  # noqa
from ._input_reader import InputReader  # noqa
from ._render_buffer import RenderBuffer  # noqa
