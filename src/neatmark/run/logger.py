"""
Logging setup for neatmark.

Every module logs through 'logging.getLogger(__name__)', i.e. through
children of the 'neatmark' logger; 'setup_logger()' decides where those
messages end up.
"""

import logging

from neatmark.run.config import Config

LOGGER_NAME = "neatmark"
LOG_FORMAT  = "[%(asctime)s][%(threadName)s][%(levelname)s] %(message)s"

def setup_logger(config: Config) -> logging.Logger:
    """
    Configure the 'neatmark' logger from 'config'.
    Calling it again replaces the handlers installed by the previous call.

    Parameters:
        config: Stores configuration parameters ('log_level', 'log_file')

    Returns:
        the configured logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(config.log_level_value)

    for handler in [h for h in logger.handlers if getattr(h, '_neatmark', False)]:
        logger.removeHandler(handler)
        handler.close()

    fmt = logging.Formatter(LOG_FORMAT)

    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    ch._neatmark = True
    logger.addHandler(ch)

    if config.log_file is not None:
        fh = logging.FileHandler(config.log_file)
        fh.setFormatter(fmt)
        fh._neatmark = True
        logger.addHandler(fh)

    return logger
