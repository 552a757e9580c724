"""Tests for analysis policy configuration."""

import logging

import pytest

from orgpipeline.config import AnalysisPolicy, load_policy_config


class TestAnalysisPolicy:
    def test_defaults(self):
        policy = AnalysisPolicy()
        assert policy.min_manager_salary_ratio == 1.20
        assert policy.max_manager_salary_ratio == 1.50
        assert policy.max_reporting_levels == 4

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"min_manager_salary_ratio": -0.1},
            {"max_manager_salary_ratio": -1},
            {"max_reporting_levels": -1},
        ],
    )
    def test_negative_values_rejected(self, kwargs):
        with pytest.raises(ValueError):
            AnalysisPolicy(**kwargs)

    def test_inverted_band_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="orgpipeline.config"):
            AnalysisPolicy(min_manager_salary_ratio=2.0, max_manager_salary_ratio=1.0)
        assert "Inverted salary band" in caplog.text

    def test_with_overrides_ignores_none(self):
        policy = AnalysisPolicy().with_overrides(max_reporting_levels=6, min_manager_salary_ratio=None)
        assert policy == AnalysisPolicy(max_reporting_levels=6)

    def test_with_overrides_validates(self):
        with pytest.raises(ValueError):
            AnalysisPolicy().with_overrides(max_reporting_levels=-2)


class TestLoadPolicyConfig:
    """Tests for reading the policy from TOML."""

    def test_reads_policy_table(self, tmp_path):
        path = tmp_path / "org.toml"
        path.write_text(
            "[tool.orgpipeline.policy]\n"
            "min_manager_salary_ratio = 1.1\n"
            "max_reporting_levels = 6\n"
        )
        policy = load_policy_config(path)

        assert policy.min_manager_salary_ratio == 1.1
        assert policy.max_manager_salary_ratio == 1.50
        assert policy.max_reporting_levels == 6

    def test_missing_table_gives_defaults(self, tmp_path):
        path = tmp_path / "org.toml"
        path.write_text("[tool.other]\nkey = 1\n")
        assert load_policy_config(path) == AnalysisPolicy()

    def test_unknown_keys_rejected(self, tmp_path):
        path = tmp_path / "org.toml"
        path.write_text("[tool.orgpipeline.policy]\nmax_levels = 3\n")
        with pytest.raises(ValueError, match="Unknown policy keys"):
            load_policy_config(path)

    def test_explicit_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_policy_config(tmp_path / "nope.toml")

    def test_default_path_matches_defaults(self):
        assert load_policy_config() == AnalysisPolicy()
