from __future__ import annotations

import io
import unittest
from contextlib import redirect_stderr

from treecopy.copier import CopyContext
from treecopy.model import ProgressState
from treecopy.policy import DECISIONS, Failure, Outcome, Pass, outcome


class DecisionTableTests(unittest.TestCase):
    def test_scan_pass_ignores_every_failure(self) -> None:
        scan_rows = {failure: result for (phase, failure), result in DECISIONS.items() if phase is Pass.SCAN}
        self.assertTrue(scan_rows)
        self.assertEqual(set(scan_rows.values()), {Outcome.IGNORE})

    def test_copy_pass_reports_everything_but_unsupported_kinds(self) -> None:
        for failure in Failure:
            expected = Outcome.IGNORE if failure is Failure.UNSUPPORTED_KIND else Outcome.REPORT
            self.assertIs(outcome(Pass.COPY, failure), expected, failure)

    def test_unlisted_combination_is_reported(self) -> None:
        self.assertIs(outcome(Pass.SCAN, Failure.WRITE), Outcome.REPORT)


class RecordedActionTests(unittest.TestCase):
    def test_recorded_action_is_the_failure_value(self) -> None:
        ctx = CopyContext(state=ProgressState())
        reported = [f for f in Failure if outcome(Pass.COPY, f) is Outcome.REPORT]

        with redirect_stderr(io.StringIO()):
            for failure in reported:
                ctx.fail(failure, "/some/path", "boom")

        self.assertEqual([r.action for r in ctx.failures], [f.value for f in reported])
        self.assertIn("read", [r.action for r in ctx.failures])

    def test_ignored_failures_are_not_recorded(self) -> None:
        ctx = CopyContext(state=ProgressState())
        err = io.StringIO()

        with redirect_stderr(err):
            ctx.fail(Failure.UNSUPPORTED_KIND, "/some/fifo", "other")

        self.assertEqual(ctx.failures, [])
        self.assertEqual(err.getvalue(), "")


if __name__ == "__main__":
    unittest.main()
