"""
Use-case: semantic search over the equity-research document index.
Depends only on Domain ports and entities - no infrastructure imports.
"""

from typing import Optional

from src.domain.ports.vector_store_port import IVectorStore


class RetrieveResearchDocumentsUseCase:
    DEFAULT_K: int = 5

    def __init__(self, vector_store: IVectorStore) -> None:
        self._vector_store = vector_store

    def execute(self, query: str, market: Optional[str] = None, k: int = DEFAULT_K) -> str:
        """Search the index and return formatted passages.

        Args:
            query:  Natural-language search query.
            market: "US" or "IN" to restrict results to one market's documents.
            k:      Number of top chunks to retrieve.

        Returns:
            Passages with source metadata separated by "---", or an empty
            string for a blank query or when nothing matches.
        """
        if not query or not query.strip():
            return ""
        chunks = self._vector_store.similarity_search(query.strip(), k=k, market=market)
        if not chunks:
            return ""
        passages = [
            f"[Source: {c.source_file}, Page: {c.page}, Market: {c.market or 'ALL'}]\n{c.content}"
            for c in chunks
        ]
        return "\n\n---\n\n".join(passages)
