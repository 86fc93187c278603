import logging, sys

from brandpipe.settings import LOG_LEVEL

def setup_logging(level: str | None = None):
    """Root handler on stdout; level from the argument, else LOG_LEVEL."""
    logger = logging.getLogger()
    if logger.handlers:  # don’t double add during reload
        return
    logger.setLevel(getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO))
    h = logging.StreamHandler(sys.stdout)
    fmt = logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s :: %(message)s"
    )
    h.setFormatter(fmt)
    logger.addHandler(h)
    # per-statement SQL only when explicitly asked for
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
