"""
Drawing the editor state to the terminal.

A frame is fully redrawn each time: hide the cursor, clear the screen,
draw the text rows (or placeholders), the status bar, and then place
and show the cursor. Everything goes into a RenderBuffer that the
caller flushes once.
"""

from . import __version__
from .term import RenderBuffer
from .term import ansi


PLACEHOLDER = b"~"


def welcome_message():
    return f"zi -- version {__version__}"


def scroll(state, geometry):
    """Update the row offset so that the cursor is on a visible text line.

    Scrolls only as far as needed.
    """
    if state.cy < state.row_offset:
        state.row_offset = state.cy
    elif state.cy >= state.row_offset + geometry.rows:
        # The +1 keeps the cursor on the last text line, not on the status bar
        state.row_offset = state.cy - geometry.rows + 1
    return state.row_offset


def render(state, geometry):
    """Render a frame and return it as bytes."""
    buffer = RenderBuffer(None)
    draw(buffer, state, geometry)
    return buffer.getvalue()


def draw(buffer, state, geometry):
    """Write a frame to the given buffer. Does not flush."""
    buffer.write(ansi.HIDE_CURSOR)
    try:
        buffer.write(ansi.CLEAR_SCREEN)
        scroll(state, geometry)
        draw_rows(buffer, state, geometry)
        draw_status_bar(buffer, state, geometry)
        buffer.write(cursor_escape(state))
    finally:
        buffer.write(ansi.SHOW_CURSOR)


def draw_rows(buffer, state, geometry):
    width = geometry.width
    gutter = state.gutter
    for i in range(geometry.rows):
        file_row = state.row_offset + i
        if file_row >= len(state.rows):
            buffer.write(PLACEHOLDER)
            if not state.welcomed and i == geometry.rows // 3:
                buffer.write(banner_line(width))
        else:
            buffer.write(ansi.STYLE_DIM)
            buffer.write(b"%*d" % (gutter, file_row + 1))
            buffer.write(ansi.STYLE_RESET)
            buffer.write(b" ")
            available = width - gutter - 1
            if available > 0:
                buffer.write(state.rows[file_row][:available])
        buffer.write(ansi.NEWLINE)


def banner_line(width):
    """The welcome banner, to be written right after a placeholder."""
    msg = welcome_message().encode()
    available = width - len(PLACEHOLDER)
    if len(msg) >= available:
        return msg[:available]
    padding = (width - len(msg)) // 2 - len(PLACEHOLDER)
    return b" " * max(padding, 0) + msg


def draw_status_bar(buffer, state, geometry):
    text = f" {state.mode.value} {state.filename or ''}".encode(errors="replace")
    width = geometry.width
    buffer.write(ansi.STYLE_INVERSE)
    buffer.write(text[:width].ljust(width))
    buffer.write(ansi.STYLE_RESET)


def cursor_escape(state):
    """The escape sequence to put the cursor at its screen position."""
    # The terminal is 1-based, the state is 0-based.
    screen_row = max(state.cy - state.row_offset, 0)
    return ansi.cursor_position(screen_row + 1, state.cx + 1)
