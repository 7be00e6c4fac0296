import enum
from typing import Optional
from dataclasses import dataclass, field


class Mode(enum.Enum):
    """The editing modes. Exactly one is active at any time."""

    NORMAL = "NORMAL"
    INSERT = "INSERT"
    COMMAND = "COMMAND"
    VISUAL = "VISUAL"


def gutter_width(row_count):
    """The number of columns needed for the line numbers."""
    return len(str(row_count)) if row_count else 0


@dataclass
class EditorState:
    """The state of the editor.

    It is passed to the screen compositor (which reads it) and the modal
    dispatcher (which updates it). The cursor position is 0-based and in
    screen columns, so the leftmost position for text is right of the
    line-number gutter.
    """

    rows: list = field(default_factory=list)
    filename: Optional[str] = None
    mode: Mode = Mode.NORMAL
    cx: int = 0
    cy: int = 0
    row_offset: int = 0
    welcomed: bool = False

    @classmethod
    def create(cls, rows, filename=None):
        state = cls(rows=list(rows), filename=filename)
        state.cx = state.min_cx
        # Don't display the welcome banner when a file was opened
        state.welcomed = filename is not None
        return state

    @property
    def gutter(self):
        return gutter_width(len(self.rows))

    @property
    def min_cx(self):
        return self.gutter + 1
