import logging
import sys

from .config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=getattr(logging, settings.sp_log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.INFO)
    # Le SDK Google est très bavard en DEBUG
    logging.getLogger("google").setLevel(logging.WARNING)
