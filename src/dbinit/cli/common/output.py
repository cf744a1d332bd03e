"""Output formatting utilities for the CLI."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

import questionary
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from dbinit.cli.common.tui_style import QUESTIONARY_STYLE_CONFIRM

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
    }
)

console = Console(theme=_THEME)

_OUTCOME_STYLES = {
    "CREATED": "ok",
    "ALREADY_EXISTS": "meta",
    "SKIPPED": "warn",
    "FAILED": "err",
}


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    def _q_try(self, fn, *args, **kwargs):
        """Call questionary prompts and drop unsupported kwargs on older versions."""
        try:
            return fn(*args, **kwargs)
        except TypeError:
            for k in ("pointer", "auto_enter"):
                kwargs.pop(k, None)
            return fn(*args, **kwargs)

    def _q(self, message: str) -> str:
        """Prefix Questionary prompts to be DBINIT consistent."""
        return f"[DBINIT] {message}"

    def info(self, msg: str) -> None:
        """Print an info message."""
        console.print(f"[title]›[/] {msg}")

    @contextmanager
    def status(self, msg: str):
        """Show a transient status spinner while work is in progress."""
        with console.status(msg, spinner="dots"):
            yield

    def success(self, msg: str) -> None:
        """Print a success message."""
        console.print(f"[ok]✓[/] {msg}")

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        console.print(f"[warn]⚠[/] {msg}")

    def error(self, msg: str) -> None:
        """Print an error message."""
        console.print(f"[err]✗[/] {msg}")

    def header(self, title: str) -> None:
        """Print a header message."""
        console.print(f"[title]{title}[/]")

    def kv(self, items: Mapping[str, Any]) -> None:
        """Print key-value pairs."""
        for k, v in items.items():
            console.print(f"[meta]{k}[/]: {v}")

    def confirm(self, message: str, *, default: bool = False) -> bool:
        """
        Ask the user for confirmation using a standardized Questionary prompt.

        Args:
            message: Confirmation question shown to the user.
            default: Default answer if the user just presses enter.

        Returns:
            True if the user confirms, False otherwise.
        """
        console.print("[meta]Use y/n then Enter[/]")

        prompt = self._q_try(
            questionary.confirm,
            self._q(message),
            default=default,
            style=QUESTIONARY_STYLE_CONFIRM,
            qmark="✦",
            auto_enter=False,
            pointer="❯",
        )
        return bool(prompt.ask())

    def results_table(self, results: Iterable[Any], title: str = "Results") -> None:
        """
        Render per-target outcomes.

        Expects objects with .target .description .outcome and optional
        .reason (like dbinit.core.models.TargetResult).
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Target", style="ok", no_wrap=True)
        t.add_column("Object")
        t.add_column("Outcome")
        t.add_column("Detail", style="meta")

        for r in results:
            outcome = getattr(r.outcome, "value", str(r.outcome))
            style = _OUTCOME_STYLES.get(outcome, "meta")
            detail = escape(str(getattr(r, "reason", "") or ""))
            if getattr(r, "inserted_rows", None) is not None:
                detail = f"{r.inserted_rows} inserted, {r.duplicate_rows or 0} duplicates"
            t.add_row(
                escape(r.target),
                escape(r.description),
                f"[{style}]{outcome}[/{style}]",
                detail,
            )

        console.print(t)

    def plan_table(self, planned: Iterable[Any], title: str = "Targets") -> None:
        """
        Render a preview of resolved targets.

        Expects objects with .target .description .path .exists and optional
        .error (like dbinit.core.targets.PlannedTarget).
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Target", style="ok", no_wrap=True)
        t.add_column("Object")
        t.add_column("File", style="meta")
        t.add_column("Present")

        for p in planned:
            if getattr(p, "error", None):
                t.add_row(escape(p.target), f"[err]{escape(p.error)}[/err]", "", "[err]no[/err]")
                continue
            present = "[ok]yes[/ok]" if p.exists else "[err]no[/err]"
            t.add_row(
                escape(p.target), escape(p.description), escape(str(p.path)), present
            )

        console.print(t)


out = Out()
