import logging

from config import setup_logging


def test_single_console_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging(logging.DEBUG)
        setup_logging(logging.INFO)

        assert len(root.handlers) == 1
        assert root.level == logging.INFO
        assert root.handlers[0].formatter._fmt == "[%(levelname)s] %(message)s"
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
