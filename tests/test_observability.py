"""
Unit tests for logging configuration.
"""

import unittest
import os
import tempfile
import shutil
import sys
import logging

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from strided.observability import configure_logging
from strided.core import Matrix


class TestObservability(unittest.TestCase):
    """Test cases for observability utilities."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        """Clean up after each test."""
        logger = logging.getLogger('strided')
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)
        logger.propagate = True
        if os.path.exists(self.test_dir):
            shutil.rmtree(self.test_dir)

    def test_logging_configuration(self):
        """Test that logging configuration works."""
        log_file = os.path.join(self.test_dir, "test.log")
        logger = configure_logging(level="DEBUG", log_file=log_file)

        self.assertIsNotNone(logger)
        self.assertEqual(logger.name, 'strided')
        self.assertFalse(logger.propagate)
        logger.info("Test message")

        # Verify log file was created
        self.assertTrue(os.path.exists(log_file))

    def test_library_events_reach_log_file(self):
        """Test that allocation and borrow activity is written at DEBUG level."""
        log_file = os.path.join(self.test_dir, "events.log")
        configure_logging(level="DEBUG", log_file=log_file)

        matrix = Matrix.new_row_major(2, 2)
        matrix.view_mut(0, 0, 1, 1).release()
        for handler in logging.getLogger('strided').handlers:
            handler.flush()

        with open(log_file) as f:
            contents = f.read()
        self.assertIn("Allocated buffer of 4 float64 elements", contents)
        self.assertIn("Acquired mutable borrow", contents)
        self.assertIn("Released borrow", contents)

    def test_reconfiguring_replaces_handlers(self):
        """Test that repeated configuration does not stack handlers."""
        configure_logging(level="INFO")
        logger = configure_logging(level="WARNING")

        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.WARNING)

    def test_invalid_level(self):
        with self.assertRaises(AttributeError):
            configure_logging(level="LOUD")


if __name__ == '__main__':
    unittest.main()
