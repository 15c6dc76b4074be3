import logging

from restline._utils import setup_logging


class TestSetupLogging:
    def test_debug_level(self):
        setup_logging(debug=True)

        assert logging.getLogger("restline").level == logging.DEBUG

    def test_info_level_by_default(self):
        setup_logging()

        assert logging.getLogger("restline").level == logging.INFO

    def test_handler_added_once(self):
        setup_logging()
        setup_logging(debug=True)

        handlers = [
            h
            for h in logging.getLogger("restline").handlers
            if getattr(h, "_restline", False)
        ]
        assert len(handlers) == 1
