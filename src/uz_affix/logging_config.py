import logging
import sys
from datetime import datetime


SIMPLE_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
DEBUG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'


def setup_logging(log_file=None, level=logging.INFO, debug=False):
    """
    Configure the root logger for command-line use.

    Args:
        log_file: Optional path of a log file to append to.
        level: Logging level (default: INFO).
        debug: If True, forces DEBUG level and adds file:line context.
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if debug:
        level = logging.DEBUG
    format_string = DEBUG_FORMAT if debug else SIMPLE_FORMAT

    handlers = []
    console_handler = logging.StreamHandler(sys.stderr)
    handlers.append(console_handler)
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='a', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(format_string))
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

    if log_file:
        logging.info("=" * 80)
        logging.info(f"NEW RUN STARTED - {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        logging.info("=" * 80)
    if debug:
        logging.debug("DEBUG MODE ENABLED - Verbose logging active")
