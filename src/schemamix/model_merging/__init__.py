"""Model merging exports."""

from .config_selection import select_datasources, select_generators, select_last_non_empty
from .key_fields import IdentityTuple, resolve_key_fields
from .model_merge import merge_model_pair, merge_models

__all__ = [
    "IdentityTuple",
    "merge_model_pair",
    "merge_models",
    "resolve_key_fields",
    "select_datasources",
    "select_generators",
    "select_last_non_empty",
]
