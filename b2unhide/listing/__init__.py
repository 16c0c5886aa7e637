"""Listing package initialization."""

from .parser import parse_records
from .reducer import ACTION_FIELDS, collect_hidden_names, resolve_action
from .target import build_target_uri, normalize_prefix

__all__ = [
    "ACTION_FIELDS",
    "build_target_uri",
    "collect_hidden_names",
    "normalize_prefix",
    "parse_records",
    "resolve_action",
]
