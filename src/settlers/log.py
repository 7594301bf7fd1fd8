"""Logging setup shared by the server and local tooling."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ActionPollFilter(logging.Filter):
    """Filter out peers polling the action log from uvicorn access logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        return 'GET /actions' not in record.getMessage()


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("uvicorn.access").addFilter(ActionPollFilter())
