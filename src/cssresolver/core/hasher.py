"""Content hashing for output filenames."""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Union

HASH_LENGTH = 10


def hash_file(path: Union[str, Path], length: int = HASH_LENGTH) -> str:
    """Return a short hex identifier derived from the file's raw bytes.

    Used for naming only; identical content always yields the same name.
    """
    digest = hashlib.sha1()
    with Path(path).open("rb") as fh:
        for chunk in iter(lambda: fh.read(8192), b""):
            digest.update(chunk)
    return digest.hexdigest()[:length]
