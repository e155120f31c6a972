"""Logging configuration for the clawdjob package.

Every component gets its logger through ``setup_logging`` so that the
console output of the API, the hunt loop and the storage layer share the
same format.

Example:
    ```python
    from clawdjob.core.logging import setup_logging

    logger = setup_logging('job_sources')
    logger.info('Starting job search across platforms...')
    ```
"""
import logging

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(logger_name: str, level: int = logging.INFO) -> logging.Logger:
    """Set up standardized logging configuration.

    If the logger already has handlers, it will not be reconfigured.

    Args:
        logger_name: The name for the logger, typically the component name
        level: Logging level for the logger and its console handler

    Returns:
        A configured logger instance
    """
    logger = logging.getLogger(logger_name)

    if not logger.handlers:
        logger.setLevel(level)

        handler = logging.StreamHandler()
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

        logger.addHandler(handler)

    return logger

# Make sure the root logger has a handler to avoid "no handler found" warnings
logging.getLogger().addHandler(logging.NullHandler())
