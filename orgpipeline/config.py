"""Analysis policy configuration."""

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path

from orgpipeline.utils.io import load_toml_config

logger = logging.getLogger(__name__)

type ConfigDict = dict[str, float | int]

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "pyproject.toml"


@dataclass(frozen=True)
class AnalysisPolicy:
    """Thresholds the organization analysis classifies against.

    A manager is expected to earn between ``min_manager_salary_ratio`` and
    ``max_manager_salary_ratio`` times the average salary of their direct
    subordinates. Employees more than ``max_reporting_levels`` manager hops
    below the CEO have a long reporting line.
    """

    min_manager_salary_ratio: float = 1.20
    max_manager_salary_ratio: float = 1.50
    max_reporting_levels: int = 4

    def __post_init__(self) -> None:
        if self.min_manager_salary_ratio < 0 or self.max_manager_salary_ratio < 0:
            raise ValueError("Salary ratios cannot be negative")
        if self.max_reporting_levels < 0:
            raise ValueError("Maximum reporting levels cannot be negative")
        if self.min_manager_salary_ratio > self.max_manager_salary_ratio:
            logger.warning(
                "Inverted salary band (min %.2f > max %.2f); underpaid check takes precedence",
                self.min_manager_salary_ratio,
                self.max_manager_salary_ratio,
            )

    def with_overrides(self, **overrides: float | int | None) -> "AnalysisPolicy":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


def _policy_table(data: dict) -> ConfigDict:
    return data.get("tool", {}).get("orgpipeline", {}).get("policy", {})


def load_policy_config(path: str | Path | None = None) -> AnalysisPolicy:
    """Read the ``[tool.orgpipeline.policy]`` table from a TOML file.

    Defaults to the project's pyproject.toml. A missing file or table
    yields the default policy.
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        if path is not None:
            raise FileNotFoundError(f"Policy config not found: {config_path}")
        logger.debug("No config at %s, using default policy", config_path)
        return AnalysisPolicy()

    table = _policy_table(load_toml_config(config_path))

    known = {f.name for f in fields(AnalysisPolicy)}
    unknown = sorted(set(table) - known)
    if unknown:
        raise ValueError(f"Unknown policy keys in {config_path.name}: {unknown}")

    policy = AnalysisPolicy(**table)
    logger.info("Loaded analysis policy from %s: %s", config_path.name, policy)
    return policy
