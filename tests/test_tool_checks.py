"""Tests for tool_checks module."""

import subprocess
import unittest
from unittest.mock import Mock, patch

from version_matrix.tool_checks import (
    ToolStatus,
    check_python_interpreter,
    check_tool_available,
    detect_python_interpreters,
    get_tool_version,
    log_tool_status,
    parse_version_output,
)


class TestToolStatus(unittest.TestCase):
    """Tests for ToolStatus dataclass."""

    def test_tool_status_available(self):
        status = ToolStatus(
            name="Python 3.12",
            command="python3.12",
            available=True,
            path="/usr/bin/python3.12",
            version="3.12.4",
        )
        self.assertTrue(status.available)
        self.assertEqual(status.path, "/usr/bin/python3.12")

    def test_tool_status_unavailable(self):
        status = ToolStatus(name="Python 3.9", command="python3.9", available=False)
        self.assertFalse(status.available)
        self.assertIsNone(status.path)
        self.assertIsNone(status.version)


class TestParseVersionOutput(unittest.TestCase):
    """Tests for parse_version_output."""

    def test_cpython(self):
        self.assertEqual(parse_version_output("Python 3.12.4\n"), "3.12.4")

    def test_prerelease(self):
        self.assertEqual(parse_version_output("Python 3.14.0rc2"), "3.14.0rc2")

    def test_pypy(self):
        output = "Python 3.10.14 (75b3de9d9035, Apr 21 2024, 10:54:48)\n[PyPy 7.3.16 with GCC 10.2.1]"
        self.assertEqual(parse_version_output(output), "3.10.14")

    def test_unrecognised_output_returns_first_line(self):
        self.assertEqual(parse_version_output("\n  custom-build 42\nsecond line\n"), "custom-build 42")

    def test_empty_output(self):
        self.assertIsNone(parse_version_output(""))
        self.assertIsNone(parse_version_output("\n \n"))


class TestGetToolVersion(unittest.TestCase):
    """Tests for get_tool_version."""

    @patch("version_matrix.tool_checks.subprocess.run")
    def test_version_on_stdout(self, mock_run):
        mock_run.return_value = Mock(stdout="Python 3.13.1\n", stderr="")
        self.assertEqual(get_tool_version("python3.13"), "3.13.1")
        mock_run.assert_called_once()
        self.assertEqual(mock_run.call_args[0][0], ["python3.13", "--version"])
        self.assertFalse(mock_run.call_args[1]["shell"])

    @patch("version_matrix.tool_checks.subprocess.run")
    def test_version_on_stderr(self, mock_run):
        mock_run.return_value = Mock(stdout="", stderr="Python 2.7.18\n")
        self.assertEqual(get_tool_version("python2.7"), "2.7.18")

    @patch("version_matrix.tool_checks.subprocess.run")
    def test_command_not_found(self, mock_run):
        mock_run.side_effect = FileNotFoundError()
        self.assertIsNone(get_tool_version("python3.99"))

    @patch("version_matrix.tool_checks.subprocess.run")
    def test_timeout(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="python3.12", timeout=10)
        self.assertIsNone(get_tool_version("python3.12"))

    @patch("version_matrix.tool_checks.subprocess.run")
    def test_os_error(self, mock_run):
        mock_run.side_effect = PermissionError("not executable")
        self.assertIsNone(get_tool_version("python3.12"))


class TestCheckToolAvailable(unittest.TestCase):
    """Tests for check_tool_available function."""

    @patch("version_matrix.tool_checks.shutil.which")
    def test_tool_available(self, mock_which):
        mock_which.return_value = "/usr/bin/python3.12"
        available, path = check_tool_available("python3.12")
        self.assertTrue(available)
        self.assertEqual(path, "/usr/bin/python3.12")

    @patch("version_matrix.tool_checks.shutil.which")
    def test_tool_not_available(self, mock_which):
        mock_which.return_value = None
        available, path = check_tool_available("python3.9")
        self.assertFalse(available)
        self.assertIsNone(path)


class TestDetectPythonInterpreters(unittest.TestCase):
    """Tests for interpreter detection."""

    @patch("version_matrix.tool_checks.get_tool_version")
    @patch("version_matrix.tool_checks.shutil.which")
    def test_detect(self, mock_which, mock_version):
        mock_which.side_effect = lambda cmd: "/usr/bin/python3.12" if cmd == "python3.12" else None
        mock_version.return_value = "3.12.4"

        statuses = detect_python_interpreters(["3.11", "3.12"])

        self.assertEqual(list(statuses), ["3.11", "3.12"])
        self.assertFalse(statuses["3.11"].available)
        self.assertIsNone(statuses["3.11"].version)
        self.assertTrue(statuses["3.12"].available)
        self.assertEqual(statuses["3.12"].version, "3.12.4")
        mock_version.assert_called_once_with("/usr/bin/python3.12")

    @patch("version_matrix.tool_checks.get_tool_version")
    @patch("version_matrix.tool_checks.shutil.which")
    def test_check_python_interpreter(self, mock_which, mock_version):
        mock_which.return_value = None
        status = check_python_interpreter("3.13")
        self.assertEqual(status.name, "Python 3.13")
        self.assertEqual(status.command, "python3.13")
        self.assertFalse(status.available)
        mock_version.assert_not_called()


class TestLogToolStatus(unittest.TestCase):
    """Tests for log_tool_status function."""

    @patch("version_matrix.tool_checks.logger")
    def test_log_all_available(self, mock_logger):
        statuses = {"3.12": ToolStatus("Python 3.12", "python3.12", True, "/usr/bin/python3.12", "3.12.4")}
        log_tool_status(statuses)
        mock_logger.info.assert_called_once()
        self.assertIn("python3.12 (3.12.4)", mock_logger.info.call_args[0][0])
        mock_logger.warning.assert_not_called()

    @patch("version_matrix.tool_checks.logger")
    def test_log_some_missing(self, mock_logger):
        statuses = {
            "3.12": ToolStatus("Python 3.12", "python3.12", True, "/usr/bin/python3.12", "3.12.4"),
            "3.9": ToolStatus("Python 3.9", "python3.9", False),
        }
        log_tool_status(statuses)
        mock_logger.info.assert_called_once()
        mock_logger.warning.assert_called_once()
        self.assertIn("python3.9", mock_logger.warning.call_args[0][0])


if __name__ == "__main__":
    unittest.main()
