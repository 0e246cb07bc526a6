"""
Tests for the delayed spinner driver (cliout/wait.py).

The start timer is replaced with a mock so the tests can fire the delayed start
by hand instead of sleeping. Most tests mock the console and its Status as well.
"""

import io
import unittest
from unittest.mock import MagicMock, patch

from rich.console import Console

from cliout.wait import Spinner, wait


class TestSpinner(unittest.TestCase):
    """Test Spinner start/stop sequencing"""

    def setUp(self):
        self.console = MagicMock()
        self.status = self.console.status.return_value
        patcher = patch("cliout.wait.threading.Timer")
        self.mock_timer_cls = patcher.start()
        self.addCleanup(patcher.stop)

    def fire_timer(self):
        """Run the callback the spinner handed to its start timer"""
        _delay, callback = self.mock_timer_cls.call_args[0]
        callback()

    def test_delay_is_converted_to_seconds(self):
        """Test that the timer is armed with the delay in seconds"""
        Spinner("Working", 300, console=self.console)
        self.assertEqual(self.mock_timer_cls.call_args[0][0], 0.3)
        self.mock_timer_cls.return_value.start.assert_called_once()

    def test_not_started_before_delay(self):
        """Test that the animation does not start until the timer fires"""
        spinner = Spinner("Working", 300, console=self.console)
        self.status.start.assert_not_called()
        self.assertFalse(spinner.running)

        self.fire_timer()
        self.status.start.assert_called_once()
        self.assertTrue(spinner.running)

    def test_stop_before_start(self):
        """Test that stopping early cancels the start for good"""
        spinner = Spinner("Working", 300, console=self.console)
        spinner.stop()
        self.mock_timer_cls.return_value.cancel.assert_called_once()

        # A timer that already fired its callback must not start anything
        self.fire_timer()
        self.status.start.assert_not_called()
        self.status.stop.assert_not_called()

    def test_stop_after_start(self):
        """Test that stop halts a running animation exactly once"""
        spinner = Spinner("Working", 300, console=self.console)
        self.fire_timer()
        spinner.stop()
        spinner.stop()
        self.status.stop.assert_called_once()
        self.assertFalse(spinner.running)

    def test_text_updates_status(self):
        """Test that setting text updates the status line in place"""
        spinner = Spinner("Working", 300, console=self.console)
        spinner.text = "Still working"
        self.assertEqual(spinner.text, "Still working")
        status_text = self.status.update.call_args.kwargs["status"]
        self.assertEqual(status_text.plain, "Still working")

    def test_brackets_in_message_are_literal(self):
        """Test that square brackets are shown as text, not parsed as markup"""
        console = Console(file=io.StringIO(), color_system=None, force_terminal=False)
        spinner = Spinner("Uploading [/tmp/build]", 300, console=console)
        self.assertEqual(spinner._status.status.plain, "Uploading [/tmp/build]")

        spinner.text = "Installing [dev] deps"
        self.assertEqual(spinner._status.status.plain, "Installing [dev] deps")
        spinner.stop()

    def test_negative_delay_starts_immediately(self):
        """Test that a negative delay is treated as zero"""
        Spinner("Working", -5, console=self.console)
        self.assertEqual(self.mock_timer_cls.call_args[0][0], 0)

    def test_wait_returns_spinner(self):
        """Test that wait() builds a Spinner on the given console"""
        spinner = wait("Deploying", 100, console=self.console)
        self.assertIsInstance(spinner, Spinner)
        self.assertEqual(self.console.status.call_args[0][0].plain, "Deploying")


if __name__ == "__main__":
    unittest.main()
