import logging
import sys

_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def setup_logging(level: int = logging.INFO):
    logger = logging.getLogger()
    logger.setLevel(level)

    # one stdout handler, even if called again (CLI re-entry, tests)
    for h in logger.handlers:
        if getattr(h, "_cwt_handler", False):
            h.setLevel(level)
            return

    fmt = logging.Formatter(_FORMAT)
    ch = logging.StreamHandler(sys.stdout)
    ch.setFormatter(fmt)
    ch._cwt_handler = True
    logger.addHandler(ch)
