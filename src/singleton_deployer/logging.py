import logging

"""
Create a global logger instance. Records are written to stderr as bare messages, so CLI output
reads like a deployment transcript.
"""

logger = logging.getLogger(__name__)
logger.propagate = False
logger.setLevel(logging.INFO)

_handler = logging.StreamHandler()
_handler.setFormatter(logging.Formatter("%(message)s"))
logger.addHandler(_handler)


def set_verbose(*, verbose: bool) -> None:
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
