import sys

from . import __version__
from ._main import main
from .utils import listen_to_logs, log_to_file


USAGE = "usage: zi [--version] [--listen] [--log PATH] [FILE]"


def cli(argv=None):
    """Entry point of the ``zi`` command. Exits the process."""
    argv = sys.argv if argv is None else argv
    sys.exit(run_cli(argv[1:]))


def run_cli(args):
    """Handle the command line arguments (without the program name).

    Returns the exit code.
    """
    args = list(args)
    if args and args[0] in ("--version", "version"):
        print("zi", __version__)
        return 0
    if "--help" in args or "-h" in args:
        print(USAGE)
        return 0
    if "--listen" in args:
        listen_to_logs()
        return 0

    if "--log" in args:
        i = args.index("--log")
        if i + 1 >= len(args):
            sys.stderr.write(USAGE + "\n")
            return 1
        log_to_file(args[i + 1])
        del args[i : i + 2]

    if len(args) > 1 or any(arg.startswith("--") for arg in args):
        sys.stderr.write(USAGE + "\n")
        return 1

    filename = args[0] if args else None
    return main(filename)
