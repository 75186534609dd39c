"""Run the query API under uvicorn."""
from __future__ import annotations

import argparse
import logging

import uvicorn

from infrastructure.config import ServiceConfig
from ui.api.main import create_app
from ui.logging_utils import setup_logging

logger = logging.getLogger(__name__)


def parse_args(config: ServiceConfig) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--host",
        default=config.host,
        help=f"Interface to bind (default: {config.host}, env DOCQUERY_HOST)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=config.port,
        help=f"Port to listen on (default: {config.port}, env DOCQUERY_PORT)",
    )
    return parser.parse_args()


def main() -> None:
    setup_logging()
    config = ServiceConfig.from_env()
    args = parse_args(config)

    logger.info(
        "Starting on %s:%s (ollama=%s, qdrant=%s, category=%s, threshold=%s)",
        args.host,
        args.port,
        config.ollama_endpoint,
        config.qdrant_endpoint,
        config.category,
        config.score_threshold,
    )
    uvicorn.run(create_app(config), host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
