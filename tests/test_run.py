"""Tests for the command line runner."""

import json

import pytest

from orgpipeline import org
from orgpipeline.run import build_parser, main


class TestMain:
    """Tests for the orgpipeline CLI entry point."""

    def test_prints_table_report(self, sample_csv, capsys):
        assert main([str(sample_csv)]) == 0

        out = capsys.readouterr().out
        assert "ORGANIZATIONAL ANALYSIS REPORT" in out
        assert "Martin Chekov" in out

    def test_json_output(self, deep_org_csv, capsys):
        assert main([str(deep_org_csv), "--format", "json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["counts"]["long_reporting_lines"] == 12

    def test_max_levels_override(self, deep_org_csv, capsys):
        assert main([str(deep_org_csv), "--format", "json", "--max-levels", "6"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["counts"]["long_reporting_lines"] == 0
        assert data["policy"]["max_reporting_levels"] == 6

    def test_config_file(self, deep_org_csv, tmp_path, capsys):
        config = tmp_path / "policy.toml"
        config.write_text("[tool.orgpipeline.policy]\nmax_reporting_levels = 5\n")

        assert main([str(deep_org_csv), "--format", "json", "--config", str(config)]) == 0
        assert json.loads(capsys.readouterr().out)["counts"]["long_reporting_lines"] == 8

    def test_structural_error_exits_1(self, write_csv, capsys):
        path = write_csv(["1,CEO,One,100000,", "2,CEO,Two,100000,"])

        assert main([str(path)]) == 1
        assert "Multiple CEOs" in capsys.readouterr().err

    def test_missing_file_exits_1(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.csv")]) == 1
        assert "File does not exist" in capsys.readouterr().err

    def test_invalid_policy_exits_1(self, sample_csv, capsys):
        assert main([str(sample_csv), "--max-levels", "-1"]) == 1
        assert "Error" in capsys.readouterr().err

    def test_fail_on_issues(self, sample_csv, healthy_employees, write_csv):
        assert main([str(sample_csv), "--fail-on-issues"]) == 1

        rows = [
            f"{e.id},{e.first_name},{e.last_name},{e.salary},{e.manager_id or ''}"
            for e in healthy_employees
        ]
        assert main([str(write_csv(rows, name="healthy.csv")), "--fail-on-issues"]) == 0

    def test_validate_only(self, sample_csv, capsys):
        assert main([str(sample_csv), "--validate"]) == 0
        assert "5 employees" in capsys.readouterr().out

    def test_validate_only_failure(self, write_csv, capsys):
        path = write_csv(["1,A,A,1,2", "2,B,B,1,1"])
        assert main([str(path), "--validate"]) == 1
        assert "No CEO found" in capsys.readouterr().err

    def test_output_dir(self, sample_csv, tmp_path):
        out_dir = tmp_path / "reports"
        assert main([str(sample_csv), "--format", "summary", "--output-dir", str(out_dir), "--output-format", "csv"]) == 0
        assert len(list(out_dir.glob("*.csv"))) == 3

    def test_bad_format_is_argparse_error(self, sample_csv):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args([str(sample_csv), "--format", "xml"])
        assert exc_info.value.code == 2


class TestDomainEntryPoints:
    """Tests for org.validate and org.run."""

    def test_validate_ok(self, sample_csv):
        assert org.validate(sample_csv) == {"status": "ok", "rows_available": 5}

    def test_validate_error(self, write_csv):
        result = org.validate(write_csv(["1,A,A,1,", "2,B,B,1,999"]))
        assert result["status"] == "error"
        assert "non-existent manager: 999" in result["message"]

    def test_run_returns_report(self, sample_csv):
        report = org.run(sample_csv)
        assert [i.manager.id for i in report.underpaid_managers] == ["124"]
