"""
Build orchestrator: runs the resolver over a set of documents.

Category folders are cleared once, before any document is processed, so
documents handled concurrently never delete each other's output.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Dict, Optional, Tuple

from .config import BuildConfig
from .html import HTMLStyleRewriter
from .logger import ErrorTracker
from .pipeline import CSSURLResolver
from ..utils.file_manager import FileManager, common_source_root

HTML_EXTENSIONS = {'.html', '.htm'}
CSS_EXTENSIONS = {'.css'}


class BuildController:
    def __init__(self, config: BuildConfig, logger: Optional[logging.Logger] = None,
                 resolver: Optional[CSSURLResolver] = None):
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.resolver = resolver or CSSURLResolver(config.resolution)
        self.files = FileManager(config.output_dir, config.source_root or common_source_root(list(config.inputs)))
        self.errors = ErrorTracker(self.logger)

    def process_document(self, path: str) -> Tuple[bool, int]:
        """
        Rewrite one document and save it.

        Returns:
            (changed, number of rewritten references)
        """
        text = self.files.read_document(path)
        ext = os.path.splitext(path)[1].lower()
        if ext in HTML_EXTENSIONS:
            rewriter = HTMLStyleRewriter(self.resolver)
            new_text = rewriter.rewrite_html(text)
            count = rewriter.asset_count()
        else:
            if ext not in CSS_EXTENSIONS:
                self.errors.record_warning(path, f"Unrecognized extension {ext or '(none)'}, treating as CSS")
            result = self.resolver.process(text)
            new_text, count = result.css, len(result.assets)
        self.files.save_document(new_text, path)
        return new_text != text, count

    def run(self, progress: Optional[Callable[[object], None]] = None) -> Dict[str, int]:
        stats = {"documents": 0, "rewritten": 0, "assets": 0, "failed": 0}

        if self.config.clean:
            self.resolver.planner.clear_category_directories()

        def process_one(path: str) -> Tuple[int, int, int]:
            if progress:
                progress({"type": "document", "stage": "processing", "path": path})
            try:
                changed, count = self.process_document(path)
            except Exception as e:
                self.errors.record_failure(path, e)
                if progress:
                    progress({"type": "document", "stage": "failed", "path": path, "reason": str(e)})
                return (0, 0, 1)
            if progress:
                progress({"type": "document", "stage": "completed", "path": path, "assets": count})
            return (1 if changed else 0, count, 0)

        inputs = list(dict.fromkeys(os.path.normpath(p) for p in self.config.inputs))
        stats["documents"] = len(inputs)

        # Each output file may be written by a single input only
        claimed: Dict[str, str] = {}
        unique_inputs = []
        for path in inputs:
            output_path = os.path.abspath(self.files.get_output_path(path))
            if output_path in claimed:
                self.errors.record_failure(path, FileExistsError(
                    f"output {output_path} is already written by {claimed[output_path]}"))
                stats["failed"] += 1
                continue
            claimed[output_path] = path
            unique_inputs.append(path)
        inputs = unique_inputs

        if self.config.concurrency and self.config.concurrency > 1:
            with ThreadPoolExecutor(max_workers=self.config.concurrency) as ex:
                futures = [ex.submit(process_one, path) for path in inputs]
                for fut in as_completed(futures):
                    r, a, f = fut.result()
                    stats["rewritten"] += r
                    stats["assets"] += a
                    stats["failed"] += f
        else:
            for path in inputs:
                r, a, f = process_one(path)
                stats["rewritten"] += r
                stats["assets"] += a
                stats["failed"] += f

        if progress:
            progress({"type": "counters", "stats": stats})
        self.logger.info(
            f"Processed {stats['documents']} document(s): {stats['rewritten']} rewritten, "
            f"{stats['assets']} reference(s), {stats['failed']} failed"
        )
        for folder, folder_stats in self.resolver.planner.get_output_stats().items():
            self.logger.debug(f"{folder}: {folder_stats['files']} file(s), {folder_stats['bytes']} bytes")
        return stats
