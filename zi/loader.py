import logging


logger = logging.getLogger("zi")


def load_rows(filename):
    """Read a file into a list of rows (bytes), with the newlines stripped.

    No filename means an empty buffer. Both "\\n" and "\\r\\n" line
    endings are recognized; a final newline does not produce an extra row.
    """
    if filename is None:
        return []
    with open(filename, "rb") as f:
        data = f.read()
    rows = data.split(b"\n")
    if rows[-1] == b"":
        rows.pop()
    rows = [row[:-1] if row.endswith(b"\r") else row for row in rows]
    logger.info(f"loaded {len(rows)} rows from {filename}")
    return rows
