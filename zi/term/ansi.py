"""
The vt100 escape sequences that zi writes. All are bytes, because
the output is written as raw bytes.
"""

HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"

CURSOR_HOME = b"\x1b[H"  # Cursor Position, no args means top left
ERASE_DISPLAY = b"\x1b[2J"  # Erase in Display, Ps == 2 means everything
CLEAR_SCREEN = CURSOR_HOME + ERASE_DISPLAY

STYLE_RESET = b"\x1b[0m"
STYLE_DIM = b"\x1b[2m"
STYLE_INVERSE = b"\x1b[7m"

NEWLINE = b"\r\n"  # output post-processing is off, so we need the \r


def cursor_position(row, col):
    """Move the cursor to the given 1-based row and column."""
    return b"\x1b[%d;%dH" % (row, col)
