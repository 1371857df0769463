#!/usr/bin/env python3
"""
Corpus Builder - extract, chunk and embed the source PDF once, offline.

Prerequisites:
    1. Ollama is running: ollama serve
    2. Model is available: ollama pull nomic-embed-text

Usage:
    python -m vector_store.main "Bhagavad Gita.pdf"
    python -m vector_store.main book.pdf --output data/embeddings.json
    python -m vector_store.main book.pdf --chunk-size 1000 --batch-size 50
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

from common.exceptions import format_error_chain
from common.logging_config import get_logger, setup_logging
from pdf_extractor import TextExtractor

from .embedder import OllamaEmbedder
from .models import MAX_EMBED_BATCH, StoreConfig
from .store import CorpusStore

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    defaults = StoreConfig()
    parser = argparse.ArgumentParser(
        description="Build the corpus embeddings file from a PDF",
    )
    parser.add_argument(
        "pdf_file",
        help="Path to the source PDF",
    )
    parser.add_argument(
        "--output", "-o",
        default=defaults.embeddings_path,
        help=f"Where to write the embeddings JSON (Default: {defaults.embeddings_path})",
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=defaults.chunk_size,
        help=f"Characters per chunk (Default: {defaults.chunk_size})",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=defaults.batch_size,
        help=f"Chunks per embedding request, at most {MAX_EMBED_BATCH} (Default: {defaults.batch_size})",
    )
    parser.add_argument(
        "--model",
        default=defaults.embedding_model,
        help=f"Ollama embedding model (Default: {defaults.embedding_model})",
    )
    parser.add_argument(
        "--ollama-url",
        default=defaults.ollama_base_url,
        help=f"Ollama API base URL (Default: {defaults.ollama_base_url})",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write log lines to this file",
    )
    return parser


async def build_corpus(
    pdf_path: str,
    config: StoreConfig,
    embedder: Optional[OllamaEmbedder] = None,
    extractor: Optional[TextExtractor] = None,
) -> CorpusStore:
    """Extract the PDF text, build the store and save it to config.embeddings_path."""
    extractor = extractor or TextExtractor()
    embedder = embedder or OllamaEmbedder(
        model=config.embedding_model,
        base_url=config.ollama_base_url,
    )

    logger.info("Starting PDF processing...")
    raw_text = await extractor.extract_text_async(pdf_path)
    store = await CorpusStore.build(raw_text, embedder, config, log=logger)
    store.save(config.embeddings_path)
    return store


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(log_file=args.log_file)

    try:
        config = StoreConfig(
            embedding_model=args.model,
            ollama_base_url=args.ollama_url,
            chunk_size=args.chunk_size,
            batch_size=args.batch_size,
            embeddings_path=str(Path(args.output)),
        )
        store = asyncio.run(build_corpus(args.pdf_file, config))
    except Exception as e:
        logger.error("FATAL: Error creating embeddings file:\n%s", format_error_chain(e))
        return 1

    stats = store.build_stats
    logger.info(
        "Success! %d chunks (%d batches, %d dims, %.2fs embedding) saved to %s",
        stats.chunks_stored,
        stats.batches,
        stats.dimensions,
        stats.embedding_time_seconds,
        config.embeddings_path,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
