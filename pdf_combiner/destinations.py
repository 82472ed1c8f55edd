"""Collection of named destinations across combined documents."""

from __future__ import annotations

import logging
import random
import string
from typing import List, Mapping, Optional, Set

from .backends.base import SourceDocument
from .ranges import resolve_page_range
from .types import NamedDestination, PageId, PageRange

LOGGER = logging.getLogger("pdf_combiner.destinations")

SUFFIX_ALPHABET = string.ascii_uppercase + string.digits + string.ascii_lowercase
SUFFIX_SEPARATOR = "."


class NamedDestinationRegistry:
    """Accumulates named destinations, renaming on collision.

    Names are unique across the registry: the first destination to use a
    name keeps it, later ones get a random suffix that is re-drawn until it
    produces an unused name.
    """

    def __init__(self, seed: Optional[int] = None, suffix_length: int = 2) -> None:
        if suffix_length < 1:
            raise ValueError("suffix_length must be >= 1")
        self._random = random.Random(seed)
        self._suffix_length = suffix_length
        self._destinations: List[NamedDestination] = []
        self._names: Set[str] = set()

    @property
    def destinations(self) -> List[NamedDestination]:
        return list(self._destinations)

    @property
    def names(self) -> List[str]:
        return [destination.name for destination in self._destinations]

    def __len__(self) -> int:
        return len(self._destinations)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def clear(self) -> None:
        self._destinations.clear()
        self._names.clear()

    def append_all(
        self,
        document: SourceDocument,
        page_map: Optional[Mapping[PageId, PageId]] = None,
    ) -> int:
        """Record every named destination of ``document``.

        When ``page_map`` is given, destinations are moved onto the mapped
        pages and those whose page is not mapped are skipped.
        """

        added = 0
        for destination in document.named_destinations():
            if self._append_mapped(destination, page_map) is not None:
                added += 1
        LOGGER.debug("Collected %d named destination(s) from %s", added, document.name)
        return added

    def append_range(
        self,
        document: SourceDocument,
        first_page: int,
        last_page: int,
        page_map: Optional[Mapping[PageId, PageId]] = None,
    ) -> int:
        """Reset the registry and record destinations on pages ``first..last``.

        Page numbers are 1-based and inclusive.
        """

        self.clear()
        page_range = resolve_page_range(PageRange(first_page, last_page), document.num_pages)
        page_ids = document.page_ids(page_range.first_index, page_range.last_index)

        added = 0
        for destination in document.named_destinations():
            if destination.page_id is None or destination.page_id not in page_ids:
                continue
            if self._append_mapped(destination, page_map) is not None:
                added += 1
        LOGGER.debug(
            "Collected %d named destination(s) from %s pages %s",
            added,
            document.name,
            page_range,
        )
        return added

    def append(self, destination: NamedDestination) -> NamedDestination:
        """Append ``destination`` under a name no other entry uses."""

        name = destination.name
        if name in self._names:
            name = self._unique_name(name)
            LOGGER.debug("Renamed named destination '%s' to '%s'", destination.name, name)
            destination = destination.renamed(name)

        self._destinations.append(destination)
        self._names.add(name)
        return destination

    def get_list(self) -> List[NamedDestination]:
        return self.destinations

    def _append_mapped(
        self,
        destination: NamedDestination,
        page_map: Optional[Mapping[PageId, PageId]],
    ) -> Optional[NamedDestination]:
        if page_map is not None:
            if destination.target is None or destination.page_id not in page_map:
                LOGGER.debug(
                    "Dropping named destination '%s': target page was not copied",
                    destination.name,
                )
                return None
            destination = destination.retargeted(
                destination.target.with_page(page_map[destination.page_id])
            )
        return self.append(destination)

    def _unique_name(self, name: str) -> str:
        length = self._suffix_length
        attempts = 0
        while True:
            suffix = "".join(self._random.choice(SUFFIX_ALPHABET) for _ in range(length))
            candidate = f"{name}{SUFFIX_SEPARATOR}{suffix}"
            if candidate not in self._names:
                return candidate
            attempts += 1
            # the suffix space for this length is nearly exhausted
            if attempts % 100 == 0:
                length += 1


__all__ = ["NamedDestinationRegistry", "SUFFIX_ALPHABET"]
