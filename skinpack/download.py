"""Saving finished packs to user storage.

A saver is any callable ``saver(data, filename)`` that persists ``data``
under (or prompted by) the suggested ``filename`` and returns the path
written, or None when the user declined. OS errors are left to the caller.
"""

import logging
from pathlib import Path

log = logging.getLogger(__name__)


def write_file(path, data):
    path = Path(path)
    with open(path, 'wb') as f:
        f.write(data)
    log.info("Wrote {0} bytes to {1}".format(len(data), path))
    return path


def save_to_directory(directory):
    directory = Path(directory)

    def saver(data, filename):
        directory.mkdir(parents=True, exist_ok=True)
        return write_file(directory / filename, data)

    return saver
