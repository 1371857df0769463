"""
Chat server entry point.

Loads the corpus before the socket is opened; a missing, empty or malformed
embeddings file ends the process with exit status 1.

Usage:
    python -m generation
    PORT=8080 EMBEDDINGS_PATH=data/embeddings.json python -m generation
"""

import sys
from typing import Optional

import uvicorn

from common.exceptions import format_error_chain, is_fatal_at_startup
from common.logging_config import get_logger, setup_logging
from vector_store.store import CorpusStore

from .app import create_app
from .config import ChatConfig

logger = get_logger(__name__)


def main(config: Optional[ChatConfig] = None) -> int:
    cfg = config or ChatConfig.from_env()
    setup_logging(cfg.log_level, log_file=cfg.log_file or None)

    logger.info("Loading pre-computed embeddings...")
    try:
        store = CorpusStore.load(cfg.embeddings_path)
    except Exception as e:
        if not is_fatal_at_startup(e):
            raise
        logger.critical("FATAL: Could not load embeddings file:\n%s", format_error_chain(e))
        return 1

    app = create_app(cfg, store=store)
    logger.info("Server is running on http://%s:%d", cfg.host, cfg.port)
    uvicorn.run(app, host=cfg.host, port=cfg.port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
