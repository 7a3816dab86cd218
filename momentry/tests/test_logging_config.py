import logging
import unittest

from momentry.utilities.logging_config import setup_logging


class TestSetupLogging(unittest.TestCase):
    def setUp(self):
        root = logging.getLogger()
        self._handlers = list(root.handlers)
        self._level = root.level
        self._access_level = logging.getLogger('uvicorn.access').level

    def tearDown(self):
        root = logging.getLogger()
        root.handlers[:] = self._handlers
        root.setLevel(self._level)
        logging.getLogger('uvicorn.access').setLevel(self._access_level)

    def test_level_name_and_single_handler(self):
        setup_logging('debug')
        root = logging.getLogger()
        self.assertEqual(root.level, logging.DEBUG)
        self.assertEqual(len(root.handlers), 1)
        self.assertEqual(logging.getLogger('uvicorn.access').level, logging.WARNING)

    def test_unknown_level_falls_back_to_info(self):
        setup_logging('chatty')
        self.assertEqual(logging.getLogger().level, logging.INFO)

    def test_access_log_follows_stricter_level(self):
        setup_logging(logging.ERROR)
        self.assertEqual(logging.getLogger('uvicorn.access').level, logging.ERROR)


if __name__ == '__main__':
    unittest.main()
