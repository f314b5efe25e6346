import sys
import logging
from typing import Any

from loguru import logger

from football_guesser.config.settings import settings


def sensitive_data_filter(record: dict[str, Any]) -> bool:
    """Filter function to mask the API token in log records."""
    sensitive_keys = ["key", "token", "password", "secret"]

    def mask_value(value: Any) -> Any:
        if isinstance(value, str):
            if len(value) > 8:
                return value[:4] + "****" + value[-4:]
            return "********"
        elif isinstance(value, dict):
            return {k: mask_value(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [mask_value(item) for item in value]
        return value

    # Mask values of explicitly sensitive keys passed through logger.bind()/extra
    extra = record.get("extra")
    if isinstance(extra, dict):
        for extra_key in list(extra):
            if any(sk in extra_key.lower() for sk in sensitive_keys):
                extra[extra_key] = mask_value(extra[extra_key])

    token = settings.football_data_token
    if token and token in record["message"]:
        record["message"] = record["message"].replace(token, "********")

    return True  # Keep the record after filtering/masking


def setup_logging() -> None:
    """Configures Loguru logger based on application settings."""
    logger.remove()  # Remove default handler

    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=True,
        diagnose=False,
        filter=sensitive_data_filter,
    )

    logger.debug(f"Logging initialized with level: {settings.log_level}")

    # Intercept standard logging messages (httpx logs every request through it)
    class InterceptHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            # Get corresponding Loguru level if it exists
            try:
                level = logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

            # Find caller from where originated the logged message
            frame, depth = logging.currentframe(), 2
            while frame.f_code.co_filename == logging.__file__:
                frame = frame.f_back
                depth += 1

            logger.opt(depth=depth, exception=record.exc_info).log(
                level, record.getMessage()
            )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    # httpx request lines are noise at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logger.debug("Standard logging intercepted.")
