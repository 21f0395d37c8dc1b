"""
Logging utilities for the free gift function service (FastAPI)
"""
import logging

from free_gift.logging.config import LoggingConfig
from free_gift.logging.handlers import get_app_handler, get_audit_handler
from free_gift.logging.slack_handler import slack_handler

APP_LOGGER_NAME = 'free_gift'
AUDIT_LOGGER_NAME = 'free_gift.audit'


def setup_app_logging(logger_name: str):
    logger = logging.getLogger(logger_name)
    logger.handlers.clear()

    logger.addHandler(get_app_handler())
    logger.addHandler(slack_handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


def setup_audit_logging(logger_name: str):
    logger = logging.getLogger(logger_name)
    logger.handlers.clear()

    logger.addHandler(get_audit_handler())
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


def get_app_logger(name: str | None = None):
    logger = logging.getLogger(name or APP_LOGGER_NAME)
    if logger.handlers:
        return logger
    return setup_app_logging(logger.name)


def init_audit_logger():
    logger = logging.getLogger(AUDIT_LOGGER_NAME)
    if logger.handlers:
        return logger
    return setup_audit_logging(AUDIT_LOGGER_NAME)


def initialize_logging():
    is_valid, message = LoggingConfig.is_valid_config()
    logger = get_app_logger()
    if not is_valid:
        logger.warning(f"logging_config_invalid | reason={message}")
    logger.info(f"Logging system initialized | firehose={LoggingConfig.FIREHOSE_ENABLED} audit={LoggingConfig.AUDIT_LOGGING_ENABLED}")
