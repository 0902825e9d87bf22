import logging
import os

import structlog

from stepf_deploy.config.settings import settings


def setup_logging(
    log_dir: str = None,
    log_filename: str = None,
    log_level: str = None,
    log_destination: str = None,
    force: bool = False,
):
    """
    Set up structured logging for the application using structlog.

    :param log_dir: Directory where the log file will be stored.
    :param log_filename: Name of the log file.
    :param log_level: Logging level (e.g., DEBUG, INFO, WARNING, ERROR, CRITICAL).
    :param log_destination: Where to send logs ("file", "stdout", or "both").
    :param force: Replace handlers installed by an earlier call.
    :return: Configured structlog logger instance.
    """
    # Use configuration values, with fallbacks to environment variables and defaults
    log_dir = log_dir or settings.get("LOG_DIR", os.environ.get("STEPF_LOGDIR", "./logs"))
    log_filename = log_filename or settings.get("LOG_FILENAME", "stepf_deploy.log")
    log_level = log_level or settings.get("LOG_LEVEL", "INFO")
    log_destination = log_destination or settings.get("LOG_DESTINATION", "stdout")

    # Handlers are only built when the root logger will take them
    install_handlers = force or not logging.getLogger().handlers

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(colors=False),
    )

    # Configure logging handlers
    handlers = []
    if install_handlers and log_destination in ("file", "both"):
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(os.path.join(log_dir, log_filename))
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if install_handlers and log_destination in ("stdout", "both"):
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        handlers.append(stream_handler)

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if install_handlers:
        logging.basicConfig(
            format="%(message)s",
            level=getattr(logging, str(log_level).upper(), logging.INFO),
            handlers=handlers or None,
            force=force,
        )

    return structlog.get_logger("stepf_deploy")
