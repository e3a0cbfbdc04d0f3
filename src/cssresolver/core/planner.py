"""
Output Planning

Decides where each resolved asset is written: a category folder under the
output root and a filename made of the content hash plus the original
extension.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import Dict, List, Any

from .config import CATEGORY_FOLDERS, ConfigError


class OutputPlanner:
    """
    Maps resolved assets to destination paths under the output root.

    The per-document pipeline only ever creates directories. Removing stale
    category folders is a separate pre-build step (clear_category_directories)
    owned by whoever runs the build.
    """

    def __init__(self, output_root: str):
        """
        Args:
            output_root: Absolute directory that receives the category folders
        """
        self.output_root = Path(output_root)
        self.logger = logging.getLogger(__name__)

    def category_directories(self) -> List[Path]:
        """Absolute paths of every category folder."""
        return [self.output_root / folder for folder in CATEGORY_FOLDERS]

    def is_filesystem_root(self) -> bool:
        return self.output_root.parent == self.output_root

    def destination_dir(self, category: str) -> Path:
        return self.output_root / category if category else self.output_root

    def plan(self, source_path: str, content_hash: str, category: str) -> str:
        """
        Compute the destination for an asset and make sure its folder exists.

        Args:
            source_path: Absolute path of the original file
            content_hash: Identifier derived from the file bytes
            category: Output folder name, or "" for the output root

        Returns:
            Absolute destination path
        """
        directory = self.destination_dir(category)
        directory.mkdir(parents=True, exist_ok=True)
        return str(directory / f"{content_hash}{os.path.splitext(source_path)[1]}")

    def clear_category_directories(self):
        """Remove every category folder under the output root."""
        if self.is_filesystem_root():
            raise ConfigError(f"refusing to clear category folders at filesystem root {self.output_root}")
        for directory in self.category_directories():
            if directory.exists():
                shutil.rmtree(directory)
                self.logger.info(f"Cleared output folder: {directory}")

    def get_output_stats(self) -> Dict[str, Any]:
        """
        Count files and bytes in each category folder.

        Returns:
            Dictionary keyed by folder name with 'files' and 'bytes' entries
        """
        stats = {}
        for directory in self.category_directories():
            files = [f for f in directory.glob('*') if f.is_file()] if directory.exists() else []
            stats[directory.name] = {
                'files': len(files),
                'bytes': sum(f.stat().st_size for f in files),
            }
        return stats
