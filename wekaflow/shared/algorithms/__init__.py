"""
Algorithm module: Weka-style algorithm types, configured instances and their registry

Every algorithm type is a declarative :class:`AlgorithmSpec` (class id, option
schema, slot schema). :class:`AlgorithmRegistry` maps class ids to specs and
builds :class:`AlgorithmInstance` trees from Weka option tokens.
"""

from .base import AlgorithmInstance, AlgorithmKind, AlgorithmSpec, OptionSpec, SlotEncoding, SlotSpec
from .errors import OptionParseError, UnknownAlgorithmClass, WekaFlowError
from .registry import AlgorithmRegistry
from . import options

__all__ = [
    # Registry and instances
    "AlgorithmRegistry",
    "AlgorithmInstance",
    # Specifications
    "AlgorithmSpec",
    "AlgorithmKind",
    "OptionSpec",
    "SlotSpec",
    "SlotEncoding",
    # Errors
    "WekaFlowError",
    "UnknownAlgorithmClass",
    "OptionParseError",
    # Option token helpers
    "options",
]
