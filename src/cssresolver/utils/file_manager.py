"""
File Management Utilities

Writes rewritten documents into the build output directory.
"""

import os
from typing import List, Optional
from pathlib import Path
import logging


class FileManager:
    """
    Manages where rewritten stylesheets and HTML documents are written.

    Each input keeps its path relative to the source root, so same-named
    documents from different folders do not overwrite each other.
    """

    def __init__(self, output_dir: str = "dist/css", source_root: Optional[str] = None):
        """
        Initialize the file manager.

        Args:
            output_dir: Directory that receives rewritten documents
            source_root: Directory the output layout mirrors; inputs outside
                it, or every input when None, keep only their basename
        """
        self.output_dir = Path(output_dir)
        self.source_root = os.path.abspath(source_root) if source_root else None
        self.logger = logging.getLogger(__name__)

    def get_output_path(self, source_path: str) -> str:
        """
        Destination of a rewritten document.

        Args:
            source_path: Path of the input document

        Returns:
            Path under the output directory mirroring the source layout
        """
        if self.source_root:
            relative = os.path.relpath(os.path.abspath(source_path), self.source_root)
            if not relative.startswith(os.pardir):
                return str(self.output_dir / relative)
        return str(self.output_dir / os.path.basename(source_path))

    def read_document(self, source_path: str, encoding: str = 'utf-8') -> str:
        with open(source_path, 'r', encoding=encoding, newline='') as f:
            return f.read()

    def save_document(self, content: str, source_path: str, encoding: str = 'utf-8') -> str:
        """
        Save a rewritten document.

        Args:
            content: Rewritten text
            source_path: Path of the input document

        Returns:
            Path to the saved file
        """
        output_path = self.get_output_path(source_path)
        os.makedirs(os.path.dirname(output_path) or '.', exist_ok=True)

        with open(output_path, 'w', encoding=encoding, newline='') as f:
            f.write(content)

        file_size = os.path.getsize(output_path)
        self.logger.info(f"Saved {output_path} ({file_size} bytes)")
        return output_path



def common_source_root(paths: List[str]) -> Optional[str]:
    """Deepest directory containing every input document."""
    if not paths:
        return None
    return os.path.commonpath([os.path.dirname(os.path.abspath(p)) for p in paths])
