"""
Stylesheet rewriting inside HTML documents.

Runs the CSS pipeline over <style> blocks and style="..." attributes. The
document is only re-serialized when at least one reference was rewritten.
"""

from __future__ import annotations

import logging
from typing import List

from bs4 import BeautifulSoup

from .pipeline import CSSURLResolver
from .rewriter import RewriteResult


class HTMLStyleRewriter:
    def __init__(self, resolver: CSSURLResolver):
        self.resolver = resolver
        self.logger = logging.getLogger(__name__)
        self.results: List[RewriteResult] = []

    def rewrite_html(self, html: str) -> str:
        soup = BeautifulSoup(html, 'lxml')
        self.results = []
        changed = False

        # <style> blocks
        for style_tag in soup.find_all('style'):
            css_text = style_tag.get_text() or ''
            result = self.resolver.process(css_text)
            self.results.append(result)
            if result.changed:
                style_tag.string = result.css
                changed = True

        # Inline style attributes
        for el in soup.find_all(style=True):
            style = el.get('style', '')
            result = self.resolver.process(style)
            self.results.append(result)
            if result.changed:
                el['style'] = result.css
                changed = True

        if not changed:
            return html
        return str(soup)

    def asset_count(self) -> int:
        """Number of references rewritten by the last rewrite_html call."""
        return sum(len(result.assets) for result in self.results)
