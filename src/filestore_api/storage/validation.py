"""Filename safety checks shared by every backend."""

import os

from filestore_api.storage.errors import InvalidNameError

PARENT_DIR = ".."
CURRENT_DIR = "."


def validate_filename(name: str) -> None:
    """
    Reject names that could escape a backend's root.

    A name passes only if it is relative, already in normal form and contains
    no ``..`` segment. Names needing normalization (``./a``, ``a/``, ``a//b``)
    are rejected rather than rewritten.

    :param name: The filename supplied by the caller.
    :raises InvalidNameError: If the name is unsafe.
    """
    if not name or "\x00" in name:
        raise InvalidNameError(name)
    if os.path.isabs(name) or name in (PARENT_DIR, CURRENT_DIR):
        raise InvalidNameError(name)
    if os.path.normpath(name) != name:
        raise InvalidNameError(name)
    segments = name.replace(os.sep, "/").split("/")
    if PARENT_DIR in segments:
        raise InvalidNameError(name)
