"""Command line runner: load an employee export, analyze it and print the report."""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from orgpipeline import org
from orgpipeline.config import load_policy_config
from orgpipeline.errors import OrgDataError

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="orgpipeline",
        description="Validate an employee hierarchy export and report salary and reporting line issues",
    )
    parser.add_argument("csv_path", type=Path, help="Employee export (Id,firstName,lastName,salary,managerId)")
    parser.add_argument("--format", choices=["table", "summary", "json"], default="table")
    parser.add_argument("--config", type=Path, help="TOML file with a [tool.orgpipeline.policy] table")
    parser.add_argument("--min-ratio", type=float, help="Minimum manager / subordinate-average salary ratio")
    parser.add_argument("--max-ratio", type=float, help="Maximum manager / subordinate-average salary ratio")
    parser.add_argument("--max-levels", type=int, help="Maximum managers between an employee and the CEO")
    parser.add_argument("--validate", action="store_true", help="Only validate, don't analyze")
    parser.add_argument("--output-dir", type=Path, help="Also save the report to this directory")
    parser.add_argument("--output-format", choices=["json", "csv", "txt"], default="json")
    parser.add_argument("--fail-on-issues", action="store_true", help="Exit 1 when any issue is found")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.validate:
        match org.validate(args.csv_path):
            case {"status": "ok", "rows_available": n}:
                console.print(f"[green]✓ {args.csv_path}: {n} employees, hierarchy is valid[/green]")
                return 0
            case {"status": "error", "message": msg}:
                err_console.print(f"[red]Error: {escape(msg)}[/red]")
                return 1

    try:
        policy = load_policy_config(args.config).with_overrides(
            min_manager_salary_ratio=args.min_ratio,
            max_manager_salary_ratio=args.max_ratio,
            max_reporting_levels=args.max_levels,
        )
        report = org.run(args.csv_path, policy)
    except (OrgDataError, ValueError, FileNotFoundError) as exc:
        err_console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 1
    except Exception:
        logger.exception("Unexpected error while analyzing %s", args.csv_path)
        return 1

    rendered = org.render_report(report, policy, args.format)
    print(rendered, end="" if rendered.endswith("\n") else "\n")

    if args.output_dir:
        org.save_report(report, args.output_dir, policy, args.output_format)

    if args.fail_on_issues and report.has_issues:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
