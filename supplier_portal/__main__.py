import logging

import uvicorn

from .config import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    logger.info("API available on http://localhost:%d/api", settings.sp_port)
    uvicorn.run(
        "supplier_portal.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=settings.sp_port,
        log_level=settings.sp_log_level.lower(),
    )


if __name__ == "__main__":
    main()
