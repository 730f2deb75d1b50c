"""Filename handling for uploaded files."""

import re
from pathlib import PurePosixPath, PureWindowsPath

MAX_FILENAME_LENGTH = 255
DEFAULT_FILENAME = "unnamed_file"

_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")
_WHITESPACE_RE = re.compile(r"\s+")


def clean_filename(filename: str | None) -> str:
    """Reduce a client-supplied filename to a bare display name.

    Directory parts from either path style are dropped, control characters are
    removed, runs of whitespace collapse to one space, and the result is cut to
    MAX_FILENAME_LENGTH keeping the extension. Names with nothing left fall
    back to DEFAULT_FILENAME.
    """
    if not filename:
        return DEFAULT_FILENAME

    name = PureWindowsPath(PurePosixPath(filename).name).name
    name = _CONTROL_CHARS_RE.sub("", name)
    name = _WHITESPACE_RE.sub(" ", name).strip()

    if len(name) > MAX_FILENAME_LENGTH:
        stem, dot, ext = name.rpartition(".")
        if dot and 0 < len(ext) < MAX_FILENAME_LENGTH - 1:
            name = f"{stem[: MAX_FILENAME_LENGTH - len(ext) - 1]}.{ext}"
        else:
            name = name[:MAX_FILENAME_LENGTH]

    if not name.strip(". "):
        return DEFAULT_FILENAME
    return name
