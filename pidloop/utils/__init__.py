"""Utilities: post-run validation."""
from pidloop.utils.validation import schema_missing, validate_output_bounds, validate_timeseries_schema

__all__ = ["schema_missing", "validate_output_bounds", "validate_timeseries_schema"]
