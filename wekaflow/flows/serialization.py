"""
Conversion between algorithm instance trees and flows

A flow's name is the composite name of the tree (``Bagging(J48)``). Its
parameters mirror the root's option schema: scalar options carry their
current value as default, composite parameters (``W``, ``K``, ``F``, ...) carry
a JSON array holding ``"<child class id> <child options>"`` per bound child.
Every composite parameter is mirrored by a component holding the child's own
flow.
"""

import hashlib
import json
import logging
from typing import List, Optional, Sequence, Union

from wekaflow.shared.algorithms import (
    AlgorithmInstance,
    AlgorithmRegistry,
    AlgorithmSpec,
    OptionParseError,
    OptionSpec,
    SlotSpec,
)

from .errors import MalformedParameterEncoding
from .flow import Flow, FlowComponent, FlowParameter
from .naming import FlowName

logger = logging.getLogger(__name__)

WEKA_VERSION = "3.9.6"
FLOW_LANGUAGE = "English"

FLAG_DATA_TYPE = "flag"
OPTION_DATA_TYPE = "option"
LIST_DATA_TYPE = "list"


def parameter_values_to_json(values: Sequence[str]) -> str:
    """Encode the values of a composite parameter as a JSON array"""
    return json.dumps(list(values))


def parameter_values_from_json(encoded: str) -> List[str]:
    """
    Decode the values of a composite parameter

    Raises:
        MalformedParameterEncoding: If ``encoded`` is not a JSON array of strings
    """
    try:
        values = json.loads(encoded)
    except (TypeError, ValueError) as e:
        raise MalformedParameterEncoding(f"Composite parameter value is not valid JSON: {encoded!r}") from e

    if not isinstance(values, list) or not all(isinstance(value, str) for value in values):
        raise MalformedParameterEncoding(f"Composite parameter value must be a JSON array of strings: {encoded!r}")
    return values


def get_external_version(spec: AlgorithmSpec) -> str:
    """Version string identifying the algorithm's implementation and option schema"""
    schema = f"{spec.class_id}_{','.join(spec.layout)}"
    return f"Weka_{WEKA_VERSION}_{hashlib.md5(schema.encode()).hexdigest()[:8]}"


def serialize_classifier(instance: AlgorithmInstance, tags: Optional[Sequence[str]] = None) -> Flow:
    """
    Describe an algorithm instance tree as a flow

    Args:
        instance: Root of the algorithm tree
        tags: Tags attached to the flow and all its components

    Returns:
        Newly built flow; the instance is not modified
    """
    spec = instance.spec
    tags = list(tags or [])

    parameters = []
    for flag in spec.layout:
        option = spec.get_option_spec(flag)
        if option is not None:
            parameters.append(_option_parameter(option, instance.get_option(flag)))
        else:
            slot = spec.get_slot_spec(flag)
            parameters.append(_slot_parameter(slot, _slot_children(instance, slot)))

    components = []
    for slot in spec.slots:
        children = _slot_children(instance, slot)
        for index, child in enumerate(children):
            identifier = f"{slot.flag}{index + 1}" if slot.is_list else slot.flag
            components.append(FlowComponent(identifier=identifier, flow=serialize_classifier(child, tags)))

    return Flow(
        name=str(FlowName.of(instance)),
        class_name=spec.class_id,
        external_version=get_external_version(spec),
        description=spec.description,
        language=FLOW_LANGUAGE,
        dependencies=f"Weka_{WEKA_VERSION}",
        tags=tags,
        parameters=parameters,
        components=components,
    )


def deserialize_classifier(flow: Flow) -> AlgorithmInstance:
    """
    Reconstruct the algorithm instance tree a flow describes

    Composite parameters are decoded bottom-up: each JSON value is split into
    a class id and option tokens, instantiated through the registry and bound
    to the parent's slot.

    Raises:
        UnknownAlgorithmClass: If a class id in the flow name is not registered
        MalformedParameterEncoding: If the name or a parameter value cannot be
            decoded, or the decoded tree does not match the flow name
    """
    name = FlowName.parse(flow.name)
    for node in name.walk():
        AlgorithmRegistry.resolve(node.class_id)

    if AlgorithmRegistry.resolve(flow.class_name) != AlgorithmRegistry.resolve(name.class_id):
        raise MalformedParameterEncoding(f"Flow {flow.name!r} has class name {flow.class_name!r}")

    instance = AlgorithmRegistry.instantiate(flow.class_name)
    spec = instance.spec
    parameters = flow.parameters_as_dict()

    unknown = [parameter for parameter in parameters if parameter not in spec.layout]
    if unknown:
        raise MalformedParameterEncoding(f"Parameters {unknown} are not options of {spec.class_id}")

    for option in spec.options:
        parameter = parameters.get(option.flag)
        if parameter is None:
            logger.debug(f"Flow {flow.name} has no parameter {option.flag}, keeping default")
            continue
        try:
            instance.set_option(option.flag, _decode_option_value(option, parameter.default_value))
        except OptionParseError as e:
            raise MalformedParameterEncoding(f"Bad value for parameter {option.flag} of {flow.name}: {e}") from e

    for slot in spec.slots:
        parameter = parameters.get(slot.flag)
        if parameter is None:
            logger.debug(f"Flow {flow.name} has no parameter {slot.flag}, keeping default")
            continue
        children = decode_composite_value(parameter.default_value)
        if not children:
            raise MalformedParameterEncoding(f"Parameter {slot.flag} of {flow.name} holds no algorithm")
        if not slot.is_list and len(children) != 1:
            raise MalformedParameterEncoding(
                f"Parameter {slot.flag} of {flow.name} holds {len(children)} algorithms, expected one"
            )
        try:
            instance.set_slot(slot.flag, children if slot.is_list else children[0])
        except ValueError as e:
            raise MalformedParameterEncoding(f"Bad value for parameter {slot.flag} of {flow.name}: {e}") from e

    reconstructed = FlowName.of(instance)
    if reconstructed != name:
        raise MalformedParameterEncoding(
            f"Flow name {flow.name!r} does not match the algorithms in its parameters ({reconstructed})"
        )

    return instance


def decode_composite_value(encoded: str) -> List[AlgorithmInstance]:
    """
    Instantiate the algorithms held by a composite parameter value

    Raises:
        MalformedParameterEncoding: If the value or one of its option strings is malformed
        UnknownAlgorithmClass: If a class id is not registered
    """
    children = []
    for value in parameter_values_from_json(encoded):
        try:
            children.append(AlgorithmRegistry.from_spec_string(value))
        except OptionParseError as e:
            raise MalformedParameterEncoding(f"Cannot decode algorithm {value!r}: {e}") from e
    return children


def count_flow_components(flow: Flow) -> int:
    """Number of flows in the component tree, the root included"""
    return 1 + sum(count_flow_components(component.flow) for component in flow.components)


def _slot_children(instance: AlgorithmInstance, slot: SlotSpec) -> List[AlgorithmInstance]:
    value = instance.get_slot(slot.flag)
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _option_parameter(option: OptionSpec, value: Union[bool, str]) -> FlowParameter:
    if option.is_flag:
        return FlowParameter(
            name=option.flag,
            data_type=FLAG_DATA_TYPE,
            default_value="true" if value else "false",
            description=option.description,
        )
    return FlowParameter(
        name=option.flag,
        data_type=OPTION_DATA_TYPE,
        default_value=value,
        description=option.description,
    )


def _slot_parameter(slot: SlotSpec, children: List[AlgorithmInstance]) -> FlowParameter:
    return FlowParameter(
        name=slot.flag,
        data_type=LIST_DATA_TYPE if slot.is_list else slot.kind.value,
        default_value=parameter_values_to_json([child.to_spec_string() for child in children]),
        description=slot.description,
    )


def _decode_option_value(option: OptionSpec, encoded: str) -> Union[bool, str]:
    if option.is_flag:
        if encoded not in ("true", "false"):
            raise MalformedParameterEncoding(f"Flag {option.flag} must be 'true' or 'false', got {encoded!r}")
        return encoded == "true"
    return encoded
