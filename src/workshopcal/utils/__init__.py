"""Utility functions for workshopcal."""

from workshopcal.utils.paths import calendar_filename, get_default_dataset_path, get_default_output_dir

__all__ = [
    "calendar_filename",
    "get_default_dataset_path",
    "get_default_output_dir",
]
