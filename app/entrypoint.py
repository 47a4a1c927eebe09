"""Entrypoint - serve the API or print normalized reviews.

Usage:
    python -m app.entrypoint                # Serve the API on HOST:PORT
    python -m app.entrypoint serve          # Same as above
    python -m app.entrypoint normalize      # Print overlaid property reviews as JSON
"""

import asyncio
import sys

import uvicorn

from app.api.deps import get_approval_store, get_ingestion_runner
from app.core.config import settings
from app.core.errors import ReviewServiceError
from app.core.logging import get_logger
from app.services.review_service import ReviewService

logger = get_logger("entrypoint")

COMMANDS = ("serve", "normalize")


async def print_property_reviews() -> None:
    service = ReviewService(get_ingestion_runner(), get_approval_store())
    response = await service.get_property_reviews()
    print(response.model_dump_json(by_alias=True, indent=2))


def main():
    command = sys.argv[1] if len(sys.argv) > 1 else "serve"
    if command not in COMMANDS:
        logger.error(f"Invalid command: {command}. Must be one of: {', '.join(COMMANDS)}")
        sys.exit(1)

    if command == "serve":
        logger.info(f"Serving on {settings.HOST}:{settings.PORT}")
        uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, log_config=None)
        return

    try:
        asyncio.run(print_property_reviews())
    except (ReviewServiceError, OSError, ValueError) as exc:
        logger.error(f"Normalization failed: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
