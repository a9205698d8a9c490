"""Attribute mining exports."""

from .attribute_injection import inject_mined_attributes
from .attribute_miner import mine_custom_attributes
from .mined_attributes import MinedFieldAttributes, MinedModelAttributes

__all__ = [
    "MinedFieldAttributes",
    "MinedModelAttributes",
    "inject_mined_attributes",
    "mine_custom_attributes",
]
