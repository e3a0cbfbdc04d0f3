"""Content-type sniffing and output category selection."""

from __future__ import annotations

import logging
import mimetypes
import os
import re
from typing import List, Tuple

import filetype

logger = logging.getLogger(__name__)

DEFAULT_MIME = "application/octet-stream"
XML_TYPES = {"application/xml", "text/xml"}
SVG_MIME = "image/svg+xml"

# Evaluated top to bottom; the first match picks the folder.
MIME_RULES: List[Tuple[re.Pattern, str]] = [
    (re.compile(r"^image/", re.I), "img"),
    (re.compile(r"^audio/", re.I), "audio"),
    (re.compile(r"^video/", re.I), "video"),
    (re.compile(r"^(font/|application/vnd\.ms-fontobject$)", re.I), "fonts"),
]

# Pre-registration font types still reported by sniffers and mimetypes tables.
_LEGACY_FONT = re.compile(r"^application/(x-)?font-", re.I)


def sniff_mime(path: str) -> str:
    """Detect the content type of a file.

    Magic numbers first (filetype), then the extension table, then
    application/octet-stream.
    """
    ext = os.path.splitext(path)[1].lower()

    mime = filetype.guess_mime(path)
    if mime is None:
        mime = mimetypes.guess_type(path)[0] or DEFAULT_MIME

    if _LEGACY_FONT.match(mime) and ext:
        mime = f"font/{ext[1:]}"

    # Sniffers cannot tell SVG apart from generic XML
    if mime in XML_TYPES and ext == ".svg":
        mime = SVG_MIME

    logger.debug(f"Detected {mime} for {path}")
    return mime


def classify(mime: str) -> str:
    """Map a content type to its output folder; "" means the output root."""
    for pattern, folder in MIME_RULES:
        if pattern.match(mime):
            return folder
    return ""
