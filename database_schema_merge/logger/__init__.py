"""Centralized logging configuration for the database schema merge tool.

This module provides a configured logger instance that can be imported and used
throughout the application. Handlers are configured from logging_config.json
when setup_logger() is called (the command line does this on start-up).

Usage:
    from database_schema_merge.logger import logger

    logger.info("This is an info message")
    logger.debug("This is a debug message")
"""

from .logger import logger, setup_logger

__all__ = ["logger", "setup_logger"]
