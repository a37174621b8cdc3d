"""
Application service: builds the equity-research document index.

Business decisions owned here:
  - CHUNK_SIZE / CHUNK_OVERLAP: what constitutes a good retrieval chunk.
  - Source notation: "US:<url-or-path>" / "IN:<url-or-path>" tags every chunk of
    a document with its market; an untagged source serves both markets.
  - Chunk ids are numbered across the whole corpus, not per document.

Infrastructure adapters (IDocumentLoader, IVectorStore) are injected; no
imports from langchain, faiss, boto3, or any other external library appear here.
"""

import logging
from dataclasses import replace
from typing import Optional, Sequence

from src.domain.entities.conversation import MarketMode
from src.domain.entities.document_chunk import DocumentChunk
from src.domain.ports.document_loader_port import IDocumentLoader
from src.domain.ports.vector_store_port import IVectorStore

logger = logging.getLogger(__name__)

MARKET_TAGS: frozenset[str] = frozenset({MarketMode.US.value, MarketMode.IN.value})


def parse_source(entry: str) -> tuple[str, Optional[str]]:
    """Split a source entry into (location, market tag or None)."""
    entry = entry.strip()
    prefix, sep, rest = entry.partition(":")
    if sep and prefix.upper() in MARKET_TAGS and rest:
        return rest.strip(), prefix.upper()
    return entry, None


class IngestResearchDocumentsService:
    CHUNK_SIZE: int = 1000
    CHUNK_OVERLAP: int = 200

    def __init__(self, loader: IDocumentLoader, vector_store: IVectorStore) -> None:
        self._loader = loader
        self._vector_store = vector_store

    def ingest(self, sources: Sequence[str], persist_path: str) -> int:
        """Load, tag, embed and persist every source.

        Args:
            sources:      Source entries, e.g. "IN:https://.../annual-report.pdf".
            persist_path: Directory where the vector store index will be saved.

        Returns:
            Total number of chunks indexed.

        Raises:
            ValueError: if the sources produce no text at all.
        """
        all_chunks: list[DocumentChunk] = []
        for entry in sources:
            location, market = parse_source(entry)
            if not location:
                continue
            chunks = self._loader.load(location)
            logger.info("Loaded %d chunks from %s (market=%s)", len(chunks), location, market)
            for chunk in chunks:
                all_chunks.append(replace(chunk, chunk_id=len(all_chunks), market=market))

        if not all_chunks:
            raise ValueError("No research document text to index")

        self._vector_store.add_documents(all_chunks)
        self._vector_store.persist(persist_path)
        return len(all_chunks)
