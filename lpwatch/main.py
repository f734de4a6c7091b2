import logging
import sys
import uvicorn
from pydantic import ValidationError
from lpwatch.config.settings import Settings
from lpwatch.api.webhook import create_app

logger = logging.getLogger("lpwatch")


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def main():
    try:
        settings = Settings()
    except ValidationError as e:
        configure_logging()
        logger.critical(f"Invalid configuration: {e}")
        sys.exit(1)

    configure_logging(settings.LOG_LEVEL)
    logger.info("🚀 lpwatch Starting Up...")
    logger.info(f"   Mode: {'DRY RUN (alerts logged)' if settings.DRY_RUN else 'LIVE (alerts posted to Discord)'}")
    logger.info(f"   Threshold: ${settings.MIN_USD_THRESHOLD} | Valuation: {settings.VALUATION_MODE}")

    app = create_app(settings)
    try:
        uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)
    except KeyboardInterrupt:
        logger.info("🛑 Shutdown signal received.")
    finally:
        logger.info("👋 Goodnight.")


if __name__ == "__main__":
    main()
