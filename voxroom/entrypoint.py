import logging

import uvicorn

from voxroom.core import settings, setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    logger.info("Starting voxroom server on %s:%s", settings.HOST, settings.PORT)
    uvicorn.run("voxroom.main:app", host=settings.HOST, port=settings.PORT, reload=settings.RELOAD)


if __name__ == "__main__":
    main()
