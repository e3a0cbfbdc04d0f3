"""
Reference discovery for CSS text.

Finds url(...) occurrences by pattern matching, without parsing the CSS.
Each match is reported with its character span so the rewrite pass can
replace it positionally.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

from ..utils.paths import clean_reference, is_data_uri, split_query_fragment


URL_REGEX = re.compile(r"url\((.*?)\)", re.I)


@dataclass(frozen=True)
class AssetReference:
    raw_match: str        # Full matched text, e.g. "url('img/a.png')"
    raw_path: str         # Unquoted, trimmed argument including query/fragment
    start: int
    end: int

    @property
    def is_data_uri(self) -> bool:
        return is_data_uri(self.raw_path)

    @property
    def lookup_path(self) -> str:
        return split_query_fragment(self.raw_path)[0]

    @property
    def suffix(self) -> str:
        return split_query_fragment(self.raw_path)[1]


def locate_references(css: str) -> Iterator[AssetReference]:
    """Yield every non-data url(...) reference in document order."""
    for match in URL_REGEX.finditer(css):
        raw_path = clean_reference(match.group(1))
        ref = AssetReference(
            raw_match=match.group(0),
            raw_path=raw_path,
            start=match.start(),
            end=match.end(),
        )
        if ref.is_data_uri:
            continue
        yield ref
