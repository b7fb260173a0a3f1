import logging
import sys

from pythonjsonlogger import jsonlogger

LOG_FORMAT = '%(asctime)s %(levelname)s %(module)s %(funcName)s %(lineno)d %(message)s'
PLAIN_FORMAT = '%(asctime)s %(levelname)s [%(module)s] %(message)s'


def setup_logging(level='INFO', json_logs=True):
    """
    Installs a single stderr handler on the `scratch_game` logger.

    stdout is left for result documents. Calling it again replaces the handler.

    Args:
        level (str | int): Logging level name or number.
        json_logs (bool): Emit JSON lines when True, plain text otherwise.

    Returns:
        logging.Logger: The configured package logger.
    """
    logger = logging.getLogger('scratch_game')
    handler = logging.StreamHandler(sys.stderr)
    if json_logs:
        formatter = jsonlogger.JsonFormatter(LOG_FORMAT)
    else:
        formatter = logging.Formatter(PLAIN_FORMAT)
    handler.setFormatter(formatter)
    if logger.hasHandlers():
        logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
