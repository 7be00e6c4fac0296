import logging

from .state import Mode
from .term import ansi
from .errors import QuitRequested, UnimplementedModeError


logger = logging.getLogger("zi")

ESCAPE = 0x1B


def ctrl_key(char):
    """Get the byte value of a key pressed together with Ctrl.

    The terminal sends the key's byte with bits 5-7 cleared.
    """
    if isinstance(char, str):
        char = ord(char)
    return char & 0x1F


class ModalDispatcher:
    """Turns key presses (bytes) into changes of the editor state.

    The output is only used to clear the screen when quitting.
    """

    def __init__(self, state, geometry, output):
        self.state = state
        self.geometry = geometry
        self.output = output
        self._handlers = {
            Mode.NORMAL: self.process_normal,
            Mode.INSERT: self.process_insert,
            Mode.COMMAND: self.process_command,
            Mode.VISUAL: self.process_visual,
        }

    def dispatch(self, b):
        """Process one byte in the context of the current mode."""
        # The welcome banner is shown until the first key press
        self.state.welcomed = True
        self._handlers[self.state.mode](b)

    def set_mode(self, mode):
        if mode is not self.state.mode:
            logger.debug(f"mode {self.state.mode.value} -> {mode.value}")
            self.state.mode = mode

    def process_normal(self, b):
        if b == ctrl_key("q"):
            self.output.write(ansi.CLEAR_SCREEN)
            self.output.flush()
            logger.info("quit requested")
            raise QuitRequested()
        elif b == ord("i"):
            self.set_mode(Mode.INSERT)
        elif b in b"hjkl":
            self.move_cursor(b)

    def move_cursor(self, b):
        """Vim-style hjkl movement, clamped to the text area."""
        state = self.state
        if b == ord("h"):
            if state.cx > state.min_cx:
                state.cx -= 1
        elif b == ord("j"):
            if state.cy < len(state.rows):
                state.cy += 1
        elif b == ord("k"):
            if state.cy > 0:
                state.cy -= 1
        elif b == ord("l"):
            if state.cx < self.geometry.columns:
                state.cx += 1

    def process_insert(self, b):
        if b == ESCAPE:
            self.set_mode(Mode.NORMAL)
        # Inserting text is not supported

    def process_command(self, b):
        if b == ESCAPE:
            self.set_mode(Mode.NORMAL)
        else:
            raise UnimplementedModeError("Command mode is not implemented")

    def process_visual(self, b):
        raise UnimplementedModeError("Visual mode is not implemented")
