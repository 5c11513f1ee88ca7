# tests/test_cli.py
import json
import logging
import os
import unittest
from unittest.mock import patch

from click.testing import CliRunner

from pyumlviz.cli import main
from pyumlviz.exceptions import DiagramRenderError

SAMPLE_PROJECT = os.path.join(os.path.dirname(__file__), '..', 'examples', 'sample_project')


class TestCLI(unittest.TestCase):

    def setUp(self):
        self.runner = CliRunner()

    @patch('pyumlviz.cli.setup_logging')
    @patch('pyumlviz.cli.Analyzer')
    def test_main(self, mock_analyzer, mock_setup_logging):
        result = self.runner.invoke(main, [SAMPLE_PROJECT, 'test_output.svg', '-d', '-r', '--svg',
                                           '--log-level', 'DEBUG'])

        self.assertEqual(result.exit_code, 0, result.output)
        mock_setup_logging.assert_called_once_with(logging.DEBUG, None)
        mock_analyzer.assert_called_once_with(SAMPLE_PROJECT, recursive=True)
        mock_analyzer.return_value.create_graph.assert_called_once_with(
            'test_output.svg', dependencies_only=True, svg_output=True)
        self.assertIn("Done", result.output)

    @patch('pyumlviz.cli.setup_logging')
    @patch('pyumlviz.cli.Analyzer')
    def test_defaults(self, mock_analyzer, mock_setup_logging):
        result = self.runner.invoke(main, [SAMPLE_PROJECT])

        self.assertEqual(result.exit_code, 0, result.output)
        mock_setup_logging.assert_called_once_with(logging.INFO, None)
        mock_analyzer.assert_called_once_with(SAMPLE_PROJECT, recursive=False)
        mock_analyzer.return_value.create_graph.assert_called_once_with(
            'diagram.png', dependencies_only=False, svg_output=False)

    @patch('pyumlviz.cli.setup_logging')
    def test_json_summary(self, mock_setup_logging):
        result = self.runner.invoke(main, [SAMPLE_PROJECT, '--json'])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(json.loads(result.stdout), [
            {'name': 'main', 'dependencies': ['module_a', 'module_b']},
            {'name': 'module_a', 'dependencies': []},
            {'name': 'module_b', 'dependencies': ['module_a', 'typing']},
        ])

    @patch('pyumlviz.cli.setup_logging')
    @patch('pyumlviz.cli.Analyzer')
    def test_render_failure(self, mock_analyzer, mock_setup_logging):
        mock_analyzer.return_value.create_graph.side_effect = DiagramRenderError("Failed to render diagram")

        result = self.runner.invoke(main, [SAMPLE_PROJECT])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Failed to render diagram", result.output)

    def test_missing_target(self):
        result = self.runner.invoke(main, ['no/such/path'])
        self.assertEqual(result.exit_code, 2)


if __name__ == '__main__':
    unittest.main()
