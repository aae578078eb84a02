"""Simple module which define logging module style and returns it."""

import logging
import os
import sys

# Configure the formatting of the logger
logging.basicConfig(format="%(message)s", stream=sys.stdout)
# logging.basicConfig(format='[%(levelname)s][%(name)s] %(message)s')

# Capture warning messages and redirect them through the logger
logging.captureWarnings(True)

# Initialize logger
logger = logging.getLogger("configdata")

# Allow the verbosity to be tuned without touching the code
_level = os.environ.get("CONFIGDATA_LOG_LEVEL")
if _level:
    logger.setLevel(_level.strip().upper())
