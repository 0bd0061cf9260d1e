"""Tests for overseas_reporter/reporting/status.py"""

from overseas_reporter.reporting.status import LogStatus


class TestLogStatus:
    def test_show_and_hide(self):
        status = LogStatus()
        status.show("Uploading… 2 items for Mexico")
        status.show("Uploaded ✓ 2 items\nGeneral Store: 2")

        assert status.current == "Uploaded ✓ 2 items\nGeneral Store: 2"
        assert len(status.history) == 2

        status.hide()
        assert status.current is None
        assert len(status.history) == 2
