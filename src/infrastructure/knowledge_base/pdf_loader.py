"""
Infrastructure adapter: research PDF (URL or path) -> IDocumentLoader.

Responsibilities confined here:
  - HTTP download and local caching of annual reports and filings.
  - PDF parsing via PyPDFLoader (LangChain community).
  - Text splitting via RecursiveCharacterTextSplitter.

Chunking parameters are injected from IngestResearchDocumentsService so the
business decision remains in the application layer.
"""

import logging
import os
from urllib.parse import urlparse

import requests
from langchain_community.document_loaders import PyPDFLoader
from langchain_text_splitters import RecursiveCharacterTextSplitter

from src.domain.entities.document_chunk import DocumentChunk
from src.domain.ports.document_loader_port import IDocumentLoader

logger = logging.getLogger(__name__)

DEFAULT_DOWNLOAD_DIR = os.path.join("data", "research")
DOWNLOAD_TIMEOUT_SECONDS = 120


class PDFDocumentLoader(IDocumentLoader):
    """Downloads research PDFs, parses pages, and returns pre-chunked DocumentChunks."""

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
        download_dir: str = DEFAULT_DOWNLOAD_DIR,
    ) -> None:
        self._download_dir = download_dir
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            length_function=len,
            separators=["\n\n", "\n", ". ", " ", ""],
        )

    def load(self, source: str) -> list[DocumentChunk]:
        local_path = self._resolve(source)
        pages = PyPDFLoader(local_path).load()
        lc_chunks = self._splitter.split_documents(pages)
        return [
            DocumentChunk(
                content=chunk.page_content,
                source_file=os.path.basename(local_path),
                page=int(chunk.metadata.get("page", 0)),
                chunk_id=idx,
            )
            for idx, chunk in enumerate(lc_chunks)
        ]

    def _resolve(self, source: str) -> str:
        if source.startswith(("http://", "https://")):
            return self._download(source)
        return source

    def _download(self, url: str) -> str:
        os.makedirs(self._download_dir, exist_ok=True)
        filename = os.path.basename(urlparse(url).path) or "document.pdf"
        local_path = os.path.join(self._download_dir, filename)
        if os.path.exists(local_path):
            return local_path

        logger.info("Downloading %s", url)
        response = requests.get(url, timeout=DOWNLOAD_TIMEOUT_SECONDS)
        response.raise_for_status()
        with open(local_path, "wb") as fh:
            fh.write(response.content)
        return local_path
