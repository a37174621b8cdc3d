"""
CLI entry point that builds the equity-research index.

Composition Root for ingestion: wires PDFDocumentLoader and FAISSVectorStore to
IngestResearchDocumentsService. Prefix each source with its market:

    export AWS_DEFAULT_REGION=us-east-1
    python -m src.infrastructure.knowledge_base.ingest \\
        "US:https://example.com/aapl-10k.pdf" "IN:data/research/tcs-ar.pdf"

Sources may also be given as a comma-separated RESEARCH_SOURCES env var.
"""

import argparse
import logging
import os

from dotenv import load_dotenv

from src.application.services.research_ingestor import IngestResearchDocumentsService
from src.infrastructure.entrypoints.composition import (
    DEFAULT_VECTORSTORE_DIR,
    configure_logging,
)
from src.infrastructure.knowledge_base.faiss_vector_store import FAISSVectorStore
from src.infrastructure.knowledge_base.pdf_loader import PDFDocumentLoader

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build the research document index.")
    parser.add_argument("sources", nargs="*", help='PDF sources, e.g. "IN:https://.../report.pdf"')
    parser.add_argument(
        "--output",
        default=os.environ.get("VECTORSTORE_DIR", DEFAULT_VECTORSTORE_DIR),
        help="Directory the FAISS index is written to",
    )
    return parser.parse_args(argv)


def main(argv=None) -> None:
    load_dotenv()
    configure_logging()
    args = parse_args(argv)

    sources = args.sources or [
        s for s in os.environ.get("RESEARCH_SOURCES", "").split(",") if s.strip()
    ]
    if not sources:
        raise SystemExit("No research sources given (arguments or RESEARCH_SOURCES).")

    loader = PDFDocumentLoader(
        chunk_size=IngestResearchDocumentsService.CHUNK_SIZE,
        chunk_overlap=IngestResearchDocumentsService.CHUNK_OVERLAP,
    )
    service = IngestResearchDocumentsService(loader=loader, vector_store=FAISSVectorStore())
    total = service.ingest(sources=sources, persist_path=args.output)
    logger.info("Ingestion complete - %d chunks indexed in %s", total, args.output)


if __name__ == "__main__":
    main()
