import sys
import logging

from .errors import ZiError, FatalRuntimeError, QuitRequested
from .state import EditorState
from .screen import draw
from .loader import load_rows
from .dispatch import ModalDispatcher
from .term import TerminalContext, InputReader, RenderBuffer
from .term import ansi


logger = logging.getLogger("zi")


def main(filename=None, stdin=None, stdout=None):
    """Run the editor. Returns the exit code.

    The terminal is in raw mode only inside the ``with`` block, so
    whatever happens, it is restored before we print anything or return.
    """

    stdin = stdin or sys.__stdin__
    stdout = stdout or sys.__stdout__

    try:
        rows = load_rows(filename)
    except OSError as err:
        write_err(f"Error: {err}")
        return 1

    state = EditorState.create(rows, filename)
    output = RenderBuffer(stdout.buffer)

    try:
        with TerminalContext(stdin=stdin, stdout=stdout) as terminal:
            reader = InputReader(terminal.fd_in)
            try:
                run(state, terminal.geometry, reader, output)
            except (ZiError, QuitRequested):
                raise
            except Exception as err:
                raise FatalRuntimeError(f"Runtime error: {err}") from err
            finally:
                cleanup_screen(output)
    except QuitRequested:
        logger.info("bye")
        return 0
    except FatalRuntimeError as err:
        logger.error("fatal error", exc_info=err)
        report_error(err)
        return 1
    except ZiError as err:
        logger.error(f"{err.__class__.__name__}: {err}")
        write_err(f"Error: {err}")
        return 1
    except OSError as err:
        logger.error(f"{err.__class__.__name__}: {err}")
        write_err(f"Error: {err}")
        return 1


def run(state, geometry, reader, output):
    """The main loop: draw, wait for a key, process the key, repeat.

    Only returns by raising, e.g. QuitRequested.
    """
    dispatcher = ModalDispatcher(state, geometry, output)
    while True:
        draw(output, state, geometry)
        output.flush()
        dispatcher.dispatch(reader.read_byte())


def cleanup_screen(output):
    """Make sure the screen is usable after the main loop ends."""
    # Drop a frame that may have been interrupted halfway
    output.clear()
    output.write(ansi.CLEAR_SCREEN)
    output.write(ansi.SHOW_CURSOR)
    try:
        output.flush()
    except OSError as err:
        logger.error(f"Could not write to stdout: {err}")


def write_err(msg):
    sys.__stderr__.write(str(msg) + "\n")
    sys.__stderr__.flush()


def report_error(err):
    """Write an error and the traceback of its cause to stderr."""

    write_err("Uncaught exception in zi:")
    write_err(err)
    cause = err.__cause__ or err
    tb = cause.__traceback__
    write_err(f"{cause.__class__.__name__}: {cause}")
    while tb:
        write_err(
            "-> line %i of %s." % (tb.tb_lineno, tb.tb_frame.f_code.co_filename)
        )
        tb = tb.tb_next
