#!/usr/bin/env python3
"""
Tests for rewriting stylesheets embedded in HTML documents.
"""

import sys
from pathlib import Path

# Add the src directory to the path
src_path = Path(__file__).parent / "src"
sys.path.insert(0, str(src_path))

from cssresolver.core.config import ResolutionConfig
from cssresolver.core.hasher import hash_file
from cssresolver.core.html import HTMLStyleRewriter
from cssresolver.core.pipeline import CSSURLResolver

PNG_BYTES = b'\x89PNG\r\n\x1a\n' + b'\x00' * 32


def _rewriter(tmp_path):
    config = ResolutionConfig(public_path='dist', base_dir=str(tmp_path))
    return HTMLStyleRewriter(CSSURLResolver(config, sniffer=lambda path: 'image/png'))


def test_style_blocks_and_attributes_are_rewritten(tmp_path):
    (tmp_path / 'img').mkdir()
    (tmp_path / 'img' / 'bg.png').write_bytes(PNG_BYTES)
    digest = hash_file(tmp_path / 'img' / 'bg.png')

    html = '''<html><head>
    <style>div{background:url('img/bg.png')}</style>
    </head><body>
    <p style="background: url('img/bg.png')">Hello</p>
    <span style="color: red">plain</span>
    </body></html>'''
    rewriter = _rewriter(tmp_path)
    rewritten = rewriter.rewrite_html(html)

    assert f"div{{background:url(../img/{digest}.png)}}" in rewritten
    assert f'style="background: url(../img/{digest}.png)"' in rewritten
    assert 'style="color: red"' in rewritten
    assert rewriter.asset_count() == 2
    assert (tmp_path / 'dist' / 'img' / f'{digest}.png').exists()


def test_document_without_references_is_returned_verbatim(tmp_path):
    html = '<!doctype html>\n<p   class=x>Hi<style>p{color:red}</style>'
    rewriter = _rewriter(tmp_path)
    assert rewriter.rewrite_html(html) == html
    assert rewriter.asset_count() == 0


def test_unresolved_references_keep_document_verbatim(tmp_path):
    html = "<div style=\"background:url('missing.png')\"></div>"
    assert _rewriter(tmp_path).rewrite_html(html) == html
