import logging
import sys
from collections.abc import Iterable

PACKAGE_LOGGER = "depth_chart_manager"


def configure_logging(
    *,
    verbose: bool = False,
    level: str | int = logging.INFO,
    quiet_loggers: Iterable[str] = (),
) -> None:
    """Send log records to stderr for a CLI run.

    *level* applies to this package's loggers; everything else reports
    warnings and above. Each of *quiet_loggers* is pinned to WARNING.
    *verbose* drops this package and the root to DEBUG and releases the
    quiet loggers.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-8s %(name)s - %(message)s", datefmt="%H:%M:%S"))
    root.addHandler(handler)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else level)
    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.NOTSET if verbose else logging.WARNING)
