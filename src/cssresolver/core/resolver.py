"""
Path resolution for stylesheet references.

A raw reference is mapped to an absolute file path in three steps:
alias substitution, a lookup relative to the working directory, then a
search through the configured include paths in order.
"""

from __future__ import annotations

import logging
import os
from typing import List, Optional, Tuple

from .config import ResolutionConfig
from ..utils.paths import normalize_path, split_query_fragment


class PathResolver:
    def __init__(self, config: ResolutionConfig):
        self.config = config
        self.logger = logging.getLogger(__name__)
        # Longest alias first so "@assets/img" beats "@assets"
        self._aliases: List[Tuple[str, str]] = sorted(
            config.aliases.items(), key=lambda item: len(item[0]), reverse=True
        )

    def apply_alias(self, path: str) -> str:
        for alias, target in self._aliases:
            if path.startswith(alias + "/"):
                return target.rstrip("/\\") + path[len(alias):]
        return path

    def candidates(self, raw_path: str) -> List[str]:
        """Absolute paths probed for a reference, in probing order."""
        lookup, _ = split_query_fragment(raw_path)
        path = normalize_path(lookup)
        if not path:
            return []
        path = self.apply_alias(path)

        base = self.config.working_dir()
        probes = [os.path.join(base, path)]
        for include in self.config.include_paths:
            probes.append(os.path.join(base, include, path))
        return [os.path.normpath(p) for p in probes]

    def resolve(self, raw_path: str) -> Optional[str]:
        """
        Return the absolute path of the referenced file, or None when no
        candidate exists.
        """
        for candidate in self.candidates(raw_path):
            if os.path.isfile(candidate):
                return candidate
        self.logger.debug(f"Unresolved reference left untouched: {raw_path}")
        return None
