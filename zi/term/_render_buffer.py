class RenderBuffer:
    """Collects the output of a frame, so it can be written in one go.

    Writing everything at once (instead of piece by piece) avoids tearing
    and flicker, and means one write syscall per redraw.
    """

    def __init__(self, file, encoding="utf-8"):
        self._file = file
        self._encoding = encoding
        self._buffer = bytearray()

    def write(self, data):
        if isinstance(data, str):
            data = data.encode(self._encoding, errors="replace")
        self._buffer += data
        return len(data)

    def getvalue(self):
        return bytes(self._buffer)

    def clear(self):
        """Discard anything that was not flushed yet."""
        self._buffer.clear()

    def flush(self):
        if not self._buffer:
            return
        data = bytes(self._buffer)
        self._buffer.clear()
        self._file.write(data)
        self._file.flush()
