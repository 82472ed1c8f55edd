"""Page range parsing, normalisation and output offset bookkeeping."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from .exceptions import InvalidPDFError, InvalidRangeError, PageOutOfBoundsError
from .types import PageRange

_TOKEN_RE = re.compile(r"^(\d+)(?:\s*(-)\s*(\d*))?$")


def parse_range_spec(spec: str) -> List[PageRange]:
    """Parse a ``;``-separated range specification such as ``10-20;80;90-``.

    ``n`` selects a single page, ``n-m`` an inclusive span and ``n-`` runs to
    the end of the document. Inverted spans are swapped and tokens starting
    at page 0 are ignored; bounds are only checked once the page count is
    known (see :func:`resolve_page_ranges`).
    """

    if spec is None or not spec.strip():
        raise InvalidRangeError("Range specification cannot be empty")

    ranges: List[PageRange] = []
    for token in spec.split(";"):
        token = token.strip()
        if not token:
            continue

        match = _TOKEN_RE.match(token)
        if not match:
            raise InvalidRangeError(
                f"Invalid range format: '{token}'. Expected 'n', 'n-m' or 'n-'."
            )

        first = int(match.group(1))
        if match.group(2) is None:
            last = first
        elif match.group(3):
            last = int(match.group(3))
        else:
            last = 0

        if last and last < first:
            first, last = last, first
        if first == 0:
            continue

        ranges.append(PageRange(first, last))

    return ranges


def resolve_page_range(page_range: PageRange, page_count: int) -> PageRange:
    """Clamp ``page_range`` to a document of ``page_count`` pages."""

    if page_count < 1:
        raise InvalidPDFError("Document has no pages")
    if page_range.first < 1 or page_range.last < 0:
        raise PageOutOfBoundsError(
            f"Invalid range '{page_range}': page numbers must be >= 1."
        )

    first, last = page_range.first, page_range.last
    if last == 0 or last > page_count:
        last = page_count
    if first > page_count:
        first = page_count
    if first > last:
        first, last = last, first
    return PageRange(first, last)


def resolve_page_ranges(
    ranges: Optional[Iterable[PageRange]],
    page_count: int,
) -> List[PageRange]:
    """Normalise ``ranges`` against ``page_count``.

    An empty selection means the whole document. Ranges are neither merged
    nor de-duplicated, so overlapping ranges copy pages more than once.
    """

    selected = list(ranges or [])
    if not selected:
        selected = [PageRange(1, 0)]
    return [resolve_page_range(page_range, page_count) for page_range in selected]


class PageOffsetCursor:
    """Running position of the next page appended to the output document."""

    def __init__(self, offset: int = 0) -> None:
        self.offset = offset

    def delta_for(self, page_range: PageRange) -> int:
        """Translation from source page index to output page index."""
        return self.offset - page_range.first_index

    def output_index(self, page_range: PageRange, source_index: int) -> int:
        return source_index + self.delta_for(page_range)

    def advance(self, page_range: PageRange) -> int:
        self.offset += page_range.page_count
        return self.offset


__all__ = [
    "parse_range_spec",
    "resolve_page_range",
    "resolve_page_ranges",
    "PageOffsetCursor",
]
