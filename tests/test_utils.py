# tests/test_utils.py

import io
import logging
import os
import tempfile
import unittest

from pyumlviz.utils import get_python_files, setup_logging


class TestSetupLogging(unittest.TestCase):

    def setUp(self):
        self.logger = logging.getLogger('pyumlviz')
        self.saved_handlers = self.logger.handlers[:]
        self.saved_level = self.logger.level
        self.logger.handlers = []

    def tearDown(self):
        self.logger.handlers = self.saved_handlers
        self.logger.setLevel(self.saved_level)

    def test_installs_one_handler(self):
        first, second = io.StringIO(), io.StringIO()
        setup_logging(logging.DEBUG, first)
        setup_logging(logging.WARNING, second)

        self.assertEqual(len(self.logger.handlers), 1)
        self.assertEqual(self.logger.level, logging.WARNING)

    def test_later_call_redirects_stream(self):
        stdout_like, stderr_like = io.StringIO(), io.StringIO()
        setup_logging(logging.INFO, stdout_like)
        setup_logging(logging.INFO, stderr_like)

        self.logger.info("summary follows")

        self.assertEqual(stdout_like.getvalue(), "")
        self.assertEqual(stderr_like.getvalue(), "[INFO] summary follows\n")


class TestGetPythonFiles(unittest.TestCase):

    def test_top_level_only_unless_recursive(self):
        with tempfile.TemporaryDirectory() as project:
            os.makedirs(os.path.join(project, 'pkg'))
            for name in ('b.py', 'a.py', 'notes.txt', os.path.join('pkg', 'c.py')):
                open(os.path.join(project, name), 'w').close()

            self.assertEqual(
                get_python_files(project),
                [os.path.join(project, 'a.py'), os.path.join(project, 'b.py')])
            self.assertEqual(
                get_python_files(project, recursive=True),
                [os.path.join(project, 'a.py'), os.path.join(project, 'b.py'),
                 os.path.join(project, 'pkg', 'c.py')])


if __name__ == '__main__':
    unittest.main()
