"""Shared utilities for the organization pipeline."""

from orgpipeline.utils.io import load_toml_config, write_output
from orgpipeline.utils.validators import validate_dataframe, validate_no_nulls
from orgpipeline.utils.types import ValidationOutcome, OutputFormat
