"""
Text rewriting and asset copying.

Replacements are applied by character offset, last reference first, so the
offsets of earlier references stay valid while the text changes length.
"""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass, field
from typing import List, Tuple

from .locator import AssetReference
from ..utils.paths import to_posix

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedAsset:
    source_path: str
    content_hash: str
    mime_type: str
    mime_category: str    # 'img' | 'audio' | 'video' | 'fonts' | '' (output root)
    destination_path: str


@dataclass
class RewriteResult:
    css: str
    assets: List[Tuple[AssetReference, ResolvedAsset]] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.assets)


def relative_url(output_root: str, destination_path: str) -> str:
    """URL of a destination as seen from a stylesheet one level below the output root."""
    return "../" + to_posix(os.path.relpath(destination_path, output_root))


def apply_replacements(css: str, pairs: List[Tuple[AssetReference, ResolvedAsset]], output_root: str) -> str:
    pieces = []
    cursor = len(css)
    for ref, asset in sorted(pairs, key=lambda pair: pair[0].start, reverse=True):
        if ref.end > cursor:
            raise ValueError(f"overlapping reference at offset {ref.start}: {ref.raw_match}")
        replacement = f"url({relative_url(output_root, asset.destination_path)}{ref.suffix})"
        pieces.append(css[ref.end:cursor])
        pieces.append(replacement)
        cursor = ref.start
    pieces.append(css[:cursor])
    return "".join(reversed(pieces))


def copy_assets(pairs: List[Tuple[AssetReference, ResolvedAsset]]) -> int:
    """Copy each distinct asset to its destination, overwriting; returns the copy count."""
    copied = set()
    for _, asset in pairs:
        if asset.destination_path in copied:
            continue
        shutil.copyfile(asset.source_path, asset.destination_path)
        copied.add(asset.destination_path)
        logger.info(f"{asset.source_path} was resolved to {asset.destination_path}")
    return len(copied)
