import os
import sys
import logging

# --------------------------------------------------------
# One logger shared by every stepup module
# --------------------------------------------------------
LOGGER_NAME = "stepup"
LEVEL = os.environ.get("STEPUP_LOG_LEVEL", "DEBUG").upper()

logger = logging.getLogger(LOGGER_NAME)
logger.setLevel(LEVEL)

# uvicorn --reload re-imports modules; keep a single stdout handler
if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(LEVEL)
    handler.setFormatter(
        logging.Formatter('[%(asctime)s] [%(levelname)s] %(message)s', datefmt='%H:%M:%S')
    )
    logger.addHandler(handler)

logger.propagate = False


def log(msg):
    """Stage progress messages ("[INFO] Scheduler: ...")."""
    logger.info(msg)


def debug(msg):
    logger.debug(msg)

def info(msg):
    logger.info(msg)

def warn(msg):
    logger.warning(msg)

def error(msg):
    logger.error(msg)
