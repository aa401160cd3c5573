"""Open documents and editor visibility as reported by the integration layer."""

from __future__ import annotations

import logging

from stacklens.model.text import TextDocument

logger = logging.getLogger(__name__)


class DocumentStore:
    """Latest text and version of every open document."""

    def __init__(self) -> None:
        self._documents: dict[str, TextDocument] = {}
        self.visible: tuple[str, ...] = ()
        self.active: str | None = None

    def open(self, uri: str, text: str, version: int = 0) -> TextDocument:
        document = TextDocument(uri, text, version)
        self._documents[uri] = document
        return document

    def update(self, uri: str, text: str, version: int) -> TextDocument | None:
        """Replace the text of *uri*; returns None if *version* is not newer.

        A change for a document that was never opened opens it.
        """
        current = self._documents.get(uri)
        if current is not None and version <= current.version:
            logger.debug(
                "Ignoring change to %s: version %d is not newer than %d",
                uri,
                version,
                current.version,
            )
            return None
        return self.open(uri, text, version)

    def close(self, uri: str) -> TextDocument | None:
        if self.active == uri:
            self.active = None
        return self._documents.pop(uri, None)

    def get(self, uri: str) -> TextDocument | None:
        return self._documents.get(uri)

    def __contains__(self, uri: object) -> bool:
        return uri in self._documents
