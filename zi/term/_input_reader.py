import os
import errno
import logging

from ..errors import InputReadTransientError


logger = logging.getLogger("zi")

TRANSIENT_ERRNOS = (errno.EAGAIN, errno.EWOULDBLOCK, errno.EINTR)


class InputReader:
    """Reads stdin one byte at a time.

    The terminal is configured so that a read returns after one byte, or
    after a short timeout with nothing. The timeout is absorbed here: the
    read is simply retried, so ``read_byte()`` blocks until there is a
    byte. The optional ``on_idle`` callable is called between retries.
    """

    def __init__(self, fd, on_idle=None):
        self._fd = fd
        self._on_idle = on_idle

    def read_byte(self):
        """Block until a byte is available and return it as an int."""
        while True:
            try:
                return self._read_once()
            except InputReadTransientError:
                if self._on_idle is not None:
                    self._on_idle()

    def _read_once(self):
        try:
            bb = os.read(self._fd, 1)
        except OSError as err:
            if err.errno in TRANSIENT_ERRNOS:
                raise InputReadTransientError(str(err)) from None
            raise
        if not bb:  # timeout
            raise InputReadTransientError("no input")
        return bb[0]
