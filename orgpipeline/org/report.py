"""Render and persist organization analysis reports.

Reports can be rendered as rich tables for the terminal, as a plain summary
for logs, or as JSON for downstream tooling. ``save_report`` writes the same
content to disk, with CSV producing one file per issue category.
"""

import json
from dataclasses import asdict
from datetime import datetime
from pathlib import Path

import pandas as pd
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from orgpipeline.config import AnalysisPolicy
from orgpipeline.org.models import Report, ReportingLineIssue, SalaryIssue
from orgpipeline.utils.io import write_output
from orgpipeline.utils.types import IssueFrames, IssueRow, OutputFormat

BANNER = "ORGANIZATIONAL ANALYSIS REPORT"
HEALTHY_MESSAGE = "No issues found. Organization structure is healthy!"

SALARY_COLUMNS = ["employee_id", "name", "salary", "average_subordinate_salary", "difference"]
REPORTING_COLUMNS = ["employee_id", "name", "reporting_levels", "excess_levels"]

console = Console(stderr=True)


def format_currency(amount: float) -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def _salary_row(issue: SalaryIssue) -> IssueRow:
    return {
        "employee_id": issue.manager.id,
        "name": issue.manager.full_name,
        "salary": round(issue.manager.salary, 2),
        "average_subordinate_salary": round(issue.average_subordinate_salary, 2),
        "difference": round(issue.difference, 2),
    }


def _reporting_row(issue: ReportingLineIssue) -> IssueRow:
    return {
        "employee_id": issue.employee.id,
        "name": issue.employee.full_name,
        "reporting_levels": issue.reporting_levels,
        "excess_levels": issue.excess_levels,
    }


def report_to_dict(report: Report, policy: AnalysisPolicy) -> dict:
    return {
        "timestamp": datetime.now().isoformat(),
        "policy": asdict(policy),
        "has_issues": report.has_issues,
        "counts": {
            "underpaid_managers": len(report.underpaid_managers),
            "overpaid_managers": len(report.overpaid_managers),
            "long_reporting_lines": len(report.long_reporting_lines),
        },
        "underpaid_managers": [_salary_row(i) for i in report.underpaid_managers],
        "overpaid_managers": [_salary_row(i) for i in report.overpaid_managers],
        "long_reporting_lines": [_reporting_row(i) for i in report.long_reporting_lines],
    }


def report_to_frames(report: Report) -> IssueFrames:
    """One DataFrame per issue category, columns fixed even when empty."""
    return {
        "underpaid_managers": pd.DataFrame(
            [_salary_row(i) for i in report.underpaid_managers], columns=SALARY_COLUMNS
        ),
        "overpaid_managers": pd.DataFrame(
            [_salary_row(i) for i in report.overpaid_managers], columns=SALARY_COLUMNS
        ),
        "long_reporting_lines": pd.DataFrame(
            [_reporting_row(i) for i in report.long_reporting_lines], columns=REPORTING_COLUMNS
        ),
    }


def _salary_table(title: str, caption: str, issues: tuple[SalaryIssue, ...], label: str) -> Table:
    table = Table(title=title, caption=caption, title_justify="left")
    table.add_column("Manager", style="cyan")
    table.add_column("ID")
    table.add_column("Current salary", justify="right")
    table.add_column("Subordinates' average", justify="right")
    table.add_column(label, justify="right", style="bold")

    for issue in issues:
        table.add_row(
            escape(issue.manager.full_name),
            escape(issue.manager.id),
            format_currency(issue.manager.salary),
            format_currency(issue.average_subordinate_salary),
            format_currency(issue.difference),
        )
    return table


def _reporting_table(issues: tuple[ReportingLineIssue, ...], max_levels: int) -> Table:
    table = Table(
        title="LONG REPORTING LINES",
        caption=f"These employees have more than {max_levels} managers between them and the CEO",
        title_justify="left",
    )
    table.add_column("Employee", style="cyan")
    table.add_column("ID")
    table.add_column("Reporting levels", justify="right")
    table.add_column("Excess levels", justify="right", style="bold")

    for issue in issues:
        table.add_row(
            escape(issue.employee.full_name),
            escape(issue.employee.id),
            str(issue.reporting_levels),
            str(issue.excess_levels),
        )
    return table


def _to_table(report: Report, policy: AnalysisPolicy) -> str:
    buf = Console(file=None, force_terminal=False, width=120)
    with buf.capture() as capture:
        buf.rule(f"[bold]{BANNER}[/bold]")
        if not report.has_issues:
            buf.print(f"[green]{HEALTHY_MESSAGE}[/green]")
        else:
            min_pct = policy.min_manager_salary_ratio - 1
            max_pct = policy.max_manager_salary_ratio - 1

            if report.underpaid_managers:
                buf.print(_salary_table(
                    "UNDERPAID MANAGERS",
                    f"These managers earn less than {min_pct:.0%} more than their subordinates' average",
                    report.underpaid_managers,
                    "Underpaid by",
                ))
            else:
                buf.print("[green]No underpaid managers found.[/green]")

            if report.overpaid_managers:
                buf.print(_salary_table(
                    "OVERPAID MANAGERS",
                    f"These managers earn more than {max_pct:.0%} more than their subordinates' average",
                    report.overpaid_managers,
                    "Overpaid by",
                ))
            else:
                buf.print("[green]No overpaid managers found.[/green]")

            if report.long_reporting_lines:
                buf.print(_reporting_table(report.long_reporting_lines, policy.max_reporting_levels))
            else:
                buf.print("[green]No excessively long reporting lines found.[/green]")
        buf.rule("END OF REPORT")
    return capture.get()


def _to_summary(report: Report) -> str:
    lines = [
        f"[org] {report.issue_count} issue(s): "
        f"{len(report.underpaid_managers)} underpaid, "
        f"{len(report.overpaid_managers)} overpaid, "
        f"{len(report.long_reporting_lines)} long reporting line(s)"
    ]
    for issue in report.underpaid_managers + report.overpaid_managers:
        lines.append(
            f"  {issue.kind.upper()}: {issue.manager.full_name} ({issue.manager.id}) "
            f"by {format_currency(issue.difference)} "
            f"(subordinate avg {format_currency(issue.average_subordinate_salary)})"
        )
    for issue in report.long_reporting_lines:
        lines.append(
            f"  LONG REPORTING LINE: {issue.employee.full_name} ({issue.employee.id}) "
            f"{issue.reporting_levels} levels, {issue.excess_levels} over"
        )
    return "\n".join(lines)


def render_report(
    report: Report,
    policy: AnalysisPolicy | None = None,
    output_format: OutputFormat = "table",
) -> str:
    """Render an analysis report as ``table``, ``summary`` or ``json`` text."""
    policy = policy or AnalysisPolicy()
    match output_format:
        case "json":
            return json.dumps(report_to_dict(report, policy), indent=2)
        case "summary":
            return _to_summary(report)
        case "table":
            return _to_table(report, policy)
        case other:
            raise ValueError(f"Unsupported report format: {other}")


def save_report(
    report: Report,
    output_dir: Path,
    policy: AnalysisPolicy | None = None,
    fmt: OutputFormat = "json",
) -> list[Path]:
    """Persist a report to ``output_dir`` under a timestamped name."""
    policy = policy or AnalysisPolicy()
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    match fmt:
        case "json":
            path = output_dir / f"org_report_{timestamp}.json"
            path.write_text(render_report(report, policy, "json"))
            paths = [path]
        case "csv":
            paths = [
                write_output(df, output_dir / f"{name}_{timestamp}", "csv")
                for name, df in report_to_frames(report).items()
            ]
        case "txt":
            path = output_dir / f"org_report_{timestamp}.txt"
            path.write_text(render_report(report, policy, "summary") + "\n")
            paths = [path]
        case other:
            raise ValueError(f"Unsupported report file format: {other}")

    for path in paths:
        console.print(f"  Report saved: {path}")
    return paths
