"""Utility functions and helpers for the gardenctl application."""
from typing import Iterable, List


def filter_strings_by_prefix(prefix: str, values: Iterable[str]) -> List[str]:
    """Keep the values starting with ``prefix``, in their original order.

    Matching is case-sensitive.
    """
    return [value for value in values if value.startswith(prefix)]
