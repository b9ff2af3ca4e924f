"""Console logging setup for the command-line entry point."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s - %(message)s"


def configure_logging(level: int = logging.INFO) -> None:
    """
    Install a console handler on the root logger.

    Library code never calls this; only entry points do.

    Args:
        level: Root log level
    """
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # SQL echo is controlled by the engine, not the root level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
