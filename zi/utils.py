"""
Logging for zi.

While the editor runs it owns the terminal: anything written to stdout
or stderr ends up in the middle of the screen. So the "zi" logger sends
its records as UDP datagrams to localhost, and ``zi --listen``, started
in another terminal, prints them. With ``--log PATH`` the records are
also appended to a file.
"""

import sys
import socket
import logging

logger = logging.getLogger("zi")
logger.setLevel(logging.INFO)

PORT = 12013
ADDRESS = ("127.0.0.1", PORT)
DATAGRAM_SIZE = 2**10

# The pid tells apart the editors that log to the same listener
LOG_FORMAT = "%(asctime)s [%(process)d] %(levelname)s: %(message)s"


class UDPHandler(logging.Handler):
    """Sends each record to the log listener.

    When nobody is listening the datagrams are simply dropped.
    """

    def __init__(self, address=ADDRESS):
        super().__init__()
        self.address = address
        self.setFormatter(logging.Formatter(LOG_FORMAT))
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)

    def emit(self, record):
        try:
            bb = self.format(record).encode("utf-8", errors="replace")
            for i in range(0, len(bb), DATAGRAM_SIZE):
                self._socket.sendto(bb[i : i + DATAGRAM_SIZE], self.address)
        except OSError:
            self.handleError(record)

    def close(self):
        self._socket.close()
        super().close()


logger.addHandler(UDPHandler())


def log_to_file(filename):
    """Also append the logs to the given file. Returns the handler."""
    handler = logging.FileHandler(filename, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return handler


def listen_to_logs(address=ADDRESS, file=None):
    """Print the logs of running zi editors. Called from ``zi --listen``.

    Runs until interrupted with Ctrl-C. This terminal is not in raw
    mode, so that still works.
    """
    file = file or sys.stdout
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(address)
    print(f"zi: listening for logs on {address[0]}:{address[1]}", file=file, flush=True)
    try:
        while True:
            data, _ = sock.recvfrom(2**16)
            print(data.decode("utf-8", errors="replace"), file=file, flush=True)
    except KeyboardInterrupt:
        pass
    finally:
        sock.close()
