"""Flows: storable descriptions of algorithm trees, and their reconstruction"""

from .errors import FlowNotFound, MalformedParameterEncoding, SetupMismatch
from .flow import Flow, FlowComponent, FlowParameter
from .naming import FlowName
from .serialization import (
    count_flow_components,
    deserialize_classifier,
    parameter_values_from_json,
    parameter_values_to_json,
    serialize_classifier,
)
from .setups import SetupParameter, SetupParameters, deserialize_setup, serialize_setup

__all__ = [
    # Flow descriptors
    "Flow",
    "FlowParameter",
    "FlowComponent",
    "FlowName",
    # Conversion
    "serialize_classifier",
    "deserialize_classifier",
    "parameter_values_to_json",
    "parameter_values_from_json",
    "count_flow_components",
    # Setups
    "SetupParameter",
    "SetupParameters",
    "serialize_setup",
    "deserialize_setup",
    # Errors
    "MalformedParameterEncoding",
    "SetupMismatch",
    "FlowNotFound",
]
