"""Utility functions."""

from .dates import utc_now
from .json_path import dig, dig_list, dig_str

__all__ = ["dig", "dig_list", "dig_str", "utc_now"]
