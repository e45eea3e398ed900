"""
Logging Configuration

Configures the "stopbuy" logger hierarchy that every package module logs
under. Check reports and skipped import rows log at INFO/WARNING;
per-mutation URL tracking and match scoring log at DEBUG.

Output goes to stderr so the CLI reports printed on stdout stay clean.
"""

import logging
import sys

# Third-party loggers that are only interesting when debugging a fetch
NOISY_LOGGERS = ("urllib3", "charset_normalizer")


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Configure logging for the CLI scripts.

    Args:
        verbose: If True, set level to DEBUG (page URL changes, debounce
            drops, per-title match counts) and let HTTP client logs through
        quiet: If True, only warnings and errors (malformed library rows,
            failed checks)
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)-8s %(name)s: %(message)s"))

    logger = logging.getLogger("stopbuy")
    logger.setLevel(level)

    # Avoid duplicate handlers if called multiple times
    logger.handlers.clear()
    logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)
