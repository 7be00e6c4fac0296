import io

import pytest

from zi import _main
from zi.state import EditorState, Mode
from zi.dispatch import ctrl_key, ESCAPE
from zi.errors import UnimplementedModeError, TerminalControlError
from zi.term import Geometry, RenderBuffer, ansi


class FakeTerminalContext:
    """Stands in for the raw-mode terminal, and tracks enter/leave."""

    instances = []

    def __init__(self, stdin=None, stdout=None):
        self.fd_in = 0
        self.geometry = None
        self.entered = False
        self.leave_count = 0
        FakeTerminalContext.instances.append(self)

    def __enter__(self):
        self.entered = True
        self.geometry = Geometry.from_size(24, 80)
        return self

    def __exit__(self, *args):
        self.entered = False
        self.leave_count += 1


class ScriptedReader:
    def __init__(self, keys):
        self._keys = list(keys)

    def read_byte(self):
        key = self._keys.pop(0)
        if isinstance(key, Exception):
            raise key
        return ord(key) if isinstance(key, str) else key


class FakeStdout:
    def __init__(self):
        self.buffer = io.BytesIO()


@pytest.fixture
def editor(monkeypatch):
    """Run main() with a fake terminal and the given keys."""
    FakeTerminalContext.instances.clear()
    monkeypatch.setattr(_main, "TerminalContext", FakeTerminalContext)

    def run(keys, filename=None):
        monkeypatch.setattr(_main, "InputReader", lambda fd: ScriptedReader(keys))
        stdout = FakeStdout()
        exit_code = _main.main(filename, stdin=object(), stdout=stdout)
        return exit_code, stdout.buffer.getvalue()

    return run


def test_quit(editor):
    exit_code, output = editor([ctrl_key("q")])
    assert exit_code == 0

    terminal = FakeTerminalContext.instances[0]
    assert terminal.leave_count == 1

    # One frame, then the screen is cleared
    assert output.count(ansi.HIDE_CURSOR) == 1
    assert output.endswith(ansi.CLEAR_SCREEN + ansi.CLEAR_SCREEN + ansi.SHOW_CURSOR)


def test_banner_only_in_first_frame(editor):
    exit_code, output = editor(["x", "x", ctrl_key("q")])
    assert exit_code == 0
    frames = output.split(ansi.HIDE_CURSOR)[1:]
    assert len(frames) == 3
    assert b"zi -- version" in frames[0]
    assert b"zi -- version" not in frames[1]
    assert b"zi -- version" not in frames[2]


def test_edit_session(editor, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "foo.txt").write_bytes(b"foo\nbar\n")

    keys = ["j", "l", "i", "x", ESCAPE, ctrl_key("q")]
    exit_code, output = editor(keys, "foo.txt")
    assert exit_code == 0

    frames = output.split(ansi.HIDE_CURSOR)[1:]
    assert len(frames) == 6
    assert b" NORMAL foo.txt " in frames[0]
    assert b" foo\r\n" in frames[0]
    assert b" INSERT " in frames[3]
    assert b" NORMAL " in frames[5]
    assert ansi.cursor_position(2, 4) in frames[5]
    assert b"zi -- version" not in output


def test_missing_file(editor, tmp_path, capfd):
    exit_code, output = editor([], str(tmp_path / "nope.txt"))
    assert exit_code == 1
    assert output == b""
    # The terminal was never touched
    assert FakeTerminalContext.instances == []
    assert "Error:" in capfd.readouterr().err


def test_fatal_error_restores_terminal(editor, capfd):
    exit_code, output = editor(["j", RuntimeError("oops")])
    assert exit_code == 1

    terminal = FakeTerminalContext.instances[0]
    assert terminal.leave_count == 1
    assert not terminal.entered
    assert output.endswith(ansi.CLEAR_SCREEN + ansi.SHOW_CURSOR)

    err = capfd.readouterr().err
    assert "Uncaught exception in zi" in err
    assert "RuntimeError: oops" in err
    assert "-> line" in err


def test_zi_error_restores_terminal(editor, capfd):
    exit_code, _ = editor([UnimplementedModeError("Visual mode is not implemented")])
    assert exit_code == 1
    assert FakeTerminalContext.instances[0].leave_count == 1
    assert "Error: Visual mode is not implemented" in capfd.readouterr().err


def test_terminal_error(monkeypatch, capfd):
    class BrokenTerminalContext(FakeTerminalContext):
        def __enter__(self):
            raise TerminalControlError("Cannot enter raw mode")

    monkeypatch.setattr(_main, "TerminalContext", BrokenTerminalContext)
    exit_code = _main.main(None, stdin=object(), stdout=FakeStdout())
    assert exit_code == 1
    assert "Cannot enter raw mode" in capfd.readouterr().err


def test_run_visual_mode():
    state = EditorState.create([])
    state.mode = Mode.VISUAL
    file = io.BytesIO()
    output = RenderBuffer(file)
    with pytest.raises(UnimplementedModeError):
        _main.run(state, Geometry.from_size(24, 80), ScriptedReader("v"), output)
    # A frame was drawn and flushed before reading
    assert file.getvalue().startswith(ansi.HIDE_CURSOR)
    assert file.getvalue().endswith(ansi.SHOW_CURSOR)


def test_stdin_without_file_descriptor(capfd):
    # The real TerminalContext, with a stdin that is not backed by a file
    exit_code = _main.main(None, stdin=io.StringIO(), stdout=FakeStdout())
    assert exit_code == 1
    assert "Error:" in capfd.readouterr().err


def test_os_error(monkeypatch, capfd):
    class FailingTerminalContext(FakeTerminalContext):
        def __enter__(self):
            raise OSError(5, "Input/output error")

    monkeypatch.setattr(_main, "TerminalContext", FailingTerminalContext)
    exit_code = _main.main(None, stdin=object(), stdout=FakeStdout())
    assert exit_code == 1
    assert "Error: [Errno 5] Input/output error" in capfd.readouterr().err
