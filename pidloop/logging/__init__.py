"""Run output: run directories, config/summary, and Parquet timeseries."""
from pidloop.logging.parquet_logger import ParquetLogger
from pidloop.logging.run_writer import make_run_id, prepare_run_dir, write_config, write_summary

__all__ = ["ParquetLogger", "make_run_id", "prepare_run_dir", "write_config", "write_summary"]
