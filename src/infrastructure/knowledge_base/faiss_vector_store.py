"""
Infrastructure adapter: FAISS + Bedrock Titan Embeddings -> IVectorStore.

All FAISS and BedrockEmbeddings details are confined here.
DocumentChunk <-> langchain Document conversion happens in this adapter so
the rest of the codebase never imports langchain_community or faiss directly.
"""

import logging
import os
from typing import Optional

from langchain_aws import BedrockEmbeddings
from langchain_community.vectorstores import FAISS
from langchain_core.documents import Document

from src.domain.entities.document_chunk import DocumentChunk
from src.domain.ports.vector_store_port import IVectorStore

logger = logging.getLogger(__name__)


class FAISSVectorStore(IVectorStore):
    """FAISS index of research passages embedded with Amazon Bedrock Titan v2."""

    DEFAULT_EMBEDDING_MODEL_ID = "amazon.titan-embed-text-v2:0"
    # Candidates fetched per requested result before the market filter applies.
    FETCH_FACTOR = 4

    def __init__(self) -> None:
        self._embedding = BedrockEmbeddings(
            model_id=os.environ.get("BEDROCK_EMBEDDING_MODEL_ID", self.DEFAULT_EMBEDDING_MODEL_ID),
            region_name=os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
        )
        self._store: FAISS | None = None

    def add_documents(self, chunks: list[DocumentChunk]) -> None:
        logger.info("Embedding %d research chunks with Bedrock", len(chunks))
        self._store = FAISS.from_documents([self._to_lc_doc(c) for c in chunks], self._embedding)

    def persist(self, path: str) -> None:
        if self._store is None:
            raise RuntimeError("No documents indexed - call add_documents() first.")
        os.makedirs(path, exist_ok=True)
        self._store.save_local(path)
        logger.info("FAISS index saved to %s", path)

    def similarity_search(
        self, query: str, k: int = 5, market: Optional[str] = None
    ) -> list[DocumentChunk]:
        if self._store is None:
            raise RuntimeError("Vector store not loaded - call FAISSVectorStore.load() first.")
        if market is None:
            results = self._store.similarity_search(query, k=k)
        else:
            results = self._store.similarity_search(
                query,
                k=k,
                filter=lambda metadata: metadata.get("market") in (market, None),
                fetch_k=k * self.FETCH_FACTOR,
            )
        return [self._from_lc_doc(doc) for doc in results]

    @classmethod
    def load(cls, path: str) -> "FAISSVectorStore":
        """Reconstruct the index from a directory written by persist().

        FAISS metadata is pickled; only indexes built by the ingestion CLI are loaded.
        """
        instance = cls()
        instance._store = FAISS.load_local(
            path,
            instance._embedding,
            allow_dangerous_deserialization=True,
        )
        return instance

    @staticmethod
    def _to_lc_doc(chunk: DocumentChunk) -> Document:
        return Document(
            page_content=chunk.content,
            metadata={
                "source_file": chunk.source_file,
                "page": chunk.page,
                "chunk_id": chunk.chunk_id,
                "market": chunk.market,
            },
        )

    @staticmethod
    def _from_lc_doc(doc: Document) -> DocumentChunk:
        return DocumentChunk(
            content=doc.page_content,
            source_file=doc.metadata.get("source_file", "Unknown"),
            page=int(doc.metadata.get("page", 0)),
            chunk_id=int(doc.metadata.get("chunk_id", 0)),
            market=doc.metadata.get("market"),
        )
