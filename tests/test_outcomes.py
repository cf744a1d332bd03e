from dbinit.core.models import Outcome, PhaseReport, StatementResult, TargetResult
from dbinit.core.outcomes import classify_definition, seed_row_counts


def test_classify_definition_without_warning_is_created():
    assert classify_definition(StatementResult(warning_count=0)) == Outcome.CREATED


def test_classify_definition_with_warning_already_exists():
    assert classify_definition(StatementResult(warning_count=1)) == Outcome.ALREADY_EXISTS


def test_seed_row_counts_reads_affected_rows_and_warnings():
    assert seed_row_counts(StatementResult(affected_rows=5, warning_count=2)) == (5, 2)


def test_seed_row_counts_clamps_unknown_rowcount():
    assert seed_row_counts(StatementResult(affected_rows=-1)) == (0, 0)


def test_phase_report_counts_only_created():
    report = PhaseReport(
        name="definitions",
        results=[
            TargetResult("a/tables/x", "Table a.x", Outcome.CREATED),
            TargetResult("a/tables/y", "Table a.y", Outcome.ALREADY_EXISTS),
            TargetResult("a/tables/z", "Table a.z", Outcome.FAILED, reason="boom"),
            TargetResult("a/views/v", "a/views/v", Outcome.SKIPPED),
        ],
    )

    assert report.count == 1
    assert [r.target for r in report.by_outcome(Outcome.FAILED)] == ["a/tables/z"]
