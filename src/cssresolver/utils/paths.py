"""
Reference Path Utilities

Helpers that turn the raw text found inside url(...) into a path suitable
for filesystem lookup.
"""

import os
import re
from typing import Tuple


QUOTE_CHARS = "'\""

_DUPLICATE_SEPARATORS = re.compile(r'/{2,}')


def clean_reference(raw: str) -> str:
    """
    Trim whitespace and surrounding quotes from a url(...) argument.

    Applying it again to its own output returns the same string.
    """
    return raw.strip().strip(QUOTE_CHARS).strip()


def is_data_uri(path: str) -> bool:
    """Return True for inline data: URIs, which never map to a file."""
    return path[:5].lower() == 'data:'


def split_query_fragment(path: str) -> Tuple[str, str]:
    """
    Split a reference into the part used for lookup and its trailing
    query/fragment text.

    Examples:
        'fonts/a.woff?v=2#hash' -> ('fonts/a.woff', '?v=2#hash')
        'img/logo.png'          -> ('img/logo.png', '')
    """
    cut = len(path)
    for marker in ('?', '#'):
        index = path.find(marker)
        if index != -1 and index < cut:
            cut = index
    return path[:cut], path[cut:]


def normalize_path(path: str) -> str:
    """
    Normalize a lookup path to forward slashes with no duplicate separators.

    Dot segments are collapsed the way os.path.normpath does it; an empty
    path stays empty.
    """
    if not path:
        return path
    normalized = os.path.normpath(path).replace('\\', '/')
    return _DUPLICATE_SEPARATORS.sub('/', normalized)


def to_posix(path: str) -> str:
    """Convert an OS path to the forward-slash form used in CSS."""
    return path.replace(os.sep, '/')
