from __future__ import annotations

import unittest
from datetime import date, datetime

from planbuilder.export.formatters import (
    format_currency,
    format_date,
    format_priority,
    format_project_deadline,
    priority_rank,
    sort_tasks_by_phase,
)


class TestFormatters(unittest.TestCase):
    def test_format_date(self) -> None:
        self.assertEqual(format_date("2026-01-05"), "Jan 5, 2026")
        self.assertEqual(format_date("2026-03-15T09:30:00Z"), "Mar 15, 2026")
        self.assertEqual(format_date(datetime(2025, 12, 31, 23, 0)), "Dec 31, 2025")

    def test_format_currency(self) -> None:
        self.assertEqual(format_currency(1200), "$1,200")
        self.assertEqual(format_currency(1200.5), "$1,200.50")
        self.assertEqual(format_currency(-5, "eur"), "-€5")
        self.assertEqual(format_currency(1500, "JPY"), "1,500 JPY")

    def test_deadline_wording(self) -> None:
        today = date(2026, 1, 10)
        cases = [
            ("2026-01-08", "Overdue by 2 days", True),
            ("2026-01-10", "Due today", False),
            ("2026-01-11", "Due tomorrow", False),
            ("2026-01-17", "Due in 7 days", False),
            ("2026-01-30", "Due on Jan 30, 2026", False),
        ]
        for value, text, overdue in cases:
            with self.subTest(value=value):
                deadline = format_project_deadline(value, today=today)
                self.assertEqual(deadline.text, text)
                self.assertEqual(deadline.is_overdue, overdue)

    def test_priority_labels_and_rank(self) -> None:
        self.assertEqual(format_priority(None), "Unspecified")
        self.assertEqual(format_priority("must-have"), "Must have")
        self.assertEqual(format_priority("Nice-To-Have"), "Nice to have")
        self.assertEqual(format_priority("urgent"), "Urgent")
        self.assertLess(priority_rank("must-have"), priority_rank("nice-to-have"))
        self.assertEqual(priority_rank("whatever"), priority_rank(None))

    def test_sort_tasks_by_phase(self) -> None:
        tasks = [
            {"id": "a", "phase": "development", "phaseOrder": 2},
            {"id": "b", "phase": "unknown"},
            {"id": "c", "phase": "setup", "phaseOrder": 1},
            {"id": "d", "phase": "development", "phaseOrder": 1},
            {"id": "e"},
        ]
        self.assertEqual([t["id"] for t in sort_tasks_by_phase(tasks)], ["c", "d", "a", "b", "e"])


if __name__ == "__main__":
    unittest.main()
