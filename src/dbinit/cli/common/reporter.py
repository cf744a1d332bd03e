"""Console reporter that turns run events into CLI output."""

from __future__ import annotations

from rich.markup import escape

from dbinit.cli.common.output import out
from dbinit.core.models import Outcome, PhaseReport, TargetResult
from dbinit.core.schema import PHASE_NAME as DEFINITIONS_PHASE

_PHASE_TITLES = {
    DEFINITIONS_PHASE: "SQL table definition script",
}


def _title(name: str) -> str:
    return _PHASE_TITLES.get(name, "SQL table data initialization script")


class ConsoleReporter:
    """Prints one line per target and a total per phase."""

    def __init__(self, *, show_tables: bool = True) -> None:
        self.show_tables = show_tables

    def phase_started(self, name: str) -> None:
        out.info(f"Starting {_title(name)}")

    def target_finished(self, result: TargetResult) -> None:
        label = escape(result.description)
        if result.outcome == Outcome.CREATED:
            if result.inserted_rows is not None:
                out.success(
                    f"{label} inserted {result.inserted_rows} rows "
                    f"({result.duplicate_rows or 0} were already present)"
                )
            else:
                out.success(f"{label} created successfully")
        elif result.outcome == Outcome.ALREADY_EXISTS:
            out.info(f"{label} skipped - already exists")
        elif result.outcome == Outcome.SKIPPED:
            out.warn(f"{label} skipped - {escape(str(result.reason))}")
        else:
            out.warn(f"{escape(str(result.reason))}. Skipping...")

    def phase_finished(self, report: PhaseReport) -> None:
        if report.name == DEFINITIONS_PHASE:
            out.success(
                f"{_title(report.name)} succeeded. {report.count} objects created"
            )
        else:
            out.success(
                f"{_title(report.name)} succeeded. {report.count} tables initialized"
            )
        failed = report.by_outcome(Outcome.FAILED)
        if failed:
            out.warn(f"{len(failed)} target(s) failed in {report.name}")
        if self.show_tables and report.results:
            out.results_table(report.results, title=report.name.capitalize())
