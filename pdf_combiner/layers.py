"""Merging of optional content (layers) from several source documents."""

from __future__ import annotations

import logging

from .backends.base import SourceDocument
from .types import OptionalContent, OptionalContentConfiguration, OrderEntry

LOGGER = logging.getLogger("pdf_combiner.layers")

LIST_MODE_ALL_PAGES = "AllPages"


class LayerMerger:
    """Accumulates layers into one container grouped by source document.

    Every contributing document becomes a labelled entry of the merged
    order list whose children are that document's own order list, so each
    source hierarchy is nested one level deeper rather than flattened.
    """

    def __init__(self) -> None:
        self._content = OptionalContent(configuration=OptionalContentConfiguration(order=[]))
        self._document_count = 0

    @property
    def layers(self) -> OptionalContent:
        return self._content

    @property
    def document_count(self) -> int:
        return self._document_count

    def get_layers(self) -> OptionalContent:
        return self._content

    def append_document_layers(self, document: SourceDocument, name: str) -> bool:
        source = document.optional_content()
        if source is None:
            return True

        for group in source.groups:
            self._content.add_group(group, source=name)

        configuration = self._content.configuration
        configuration.order.append(
            OrderEntry(name=name, children=list(source.configuration.order))
        )
        configuration.off.extend(source.configuration.off)
        configuration.list_mode = LIST_MODE_ALL_PAGES
        self._document_count += 1

        LOGGER.debug("Merged %d layer(s) from %s as '%s'", len(source.groups), document.name, name)
        return True


__all__ = ["LayerMerger", "LIST_MODE_ALL_PAGES"]
