"""
Single-document pipeline: locate, resolve, plan, rewrite, copy.

All references are resolved before any text is rewritten or any file is
copied. A failure while reading a resolved file aborts the whole document.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Tuple

from .classifier import classify, sniff_mime
from .config import ResolutionConfig
from .hasher import hash_file
from .locator import AssetReference, locate_references
from .planner import OutputPlanner
from .resolver import PathResolver
from .rewriter import ResolvedAsset, RewriteResult, apply_replacements, copy_assets


class CSSURLResolver:
    def __init__(self,
                 config: Optional[ResolutionConfig] = None,
                 hasher: Callable[[str], str] = hash_file,
                 sniffer: Callable[[str], str] = sniff_mime):
        self.config = config or ResolutionConfig()
        self.hasher = hasher
        self.sniffer = sniffer
        self.resolver = PathResolver(self.config)
        self.planner = OutputPlanner(self.config.output_root())
        self.logger = logging.getLogger(__name__)

    def _resolve_asset(self, source_path: str) -> ResolvedAsset:
        content_hash = self.hasher(source_path)
        mime = self.sniffer(source_path)
        category = classify(mime)
        destination = self.planner.plan(source_path, content_hash, category)
        return ResolvedAsset(
            source_path=source_path,
            content_hash=content_hash,
            mime_type=mime,
            mime_category=category,
            destination_path=destination,
        )

    def resolve_references(self, css: str) -> List[Tuple[AssetReference, ResolvedAsset]]:
        pairs = []
        seen: Dict[str, ResolvedAsset] = {}
        for ref in locate_references(css):
            source_path = self.resolver.resolve(ref.raw_path)
            if source_path is None:
                continue
            if source_path not in seen:
                seen[source_path] = self._resolve_asset(source_path)
            pairs.append((ref, seen[source_path]))
        return pairs

    def process(self, css: str) -> RewriteResult:
        """Rewrite every resolvable reference in ``css`` and copy its file."""
        pairs = self.resolve_references(css)
        if not pairs:
            return RewriteResult(css=css)

        new_css = apply_replacements(css, pairs, str(self.planner.output_root))
        copied = copy_assets(pairs)
        self.logger.debug(f"Rewrote {len(pairs)} reference(s), copied {copied} file(s)")
        return RewriteResult(css=new_css, assets=pairs)

    def process_file(self, path: str, encoding: str = "utf-8") -> RewriteResult:
        with open(path, 'r', encoding=encoding, newline='') as f:
            css = f.read()
        return self.process(css)
