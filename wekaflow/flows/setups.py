"""
Setups: the parameter values an algorithm tree was actually run with

A flow declares parameters and their defaults; a setup records, for every
flow in the component tree, the value each parameter had. Components are
addressed by their path from the root flow ("" for the root, "W", "W/K", ...).
"""

import dataclasses
import logging
from typing import Dict, Iterator, List, Optional, Tuple

from pydantic import Field
from pydantic.dataclasses import dataclass

from wekaflow.shared.algorithms import AlgorithmInstance

from .errors import MalformedParameterEncoding, SetupMismatch
from .flow import Flow, FlowParameter
from .naming import FlowName
from .serialization import deserialize_classifier, serialize_classifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SetupParameter:
    """Value of one flow parameter within a setup"""

    component: str
    flow_name: str
    parameter_name: str
    data_type: str
    default_value: str
    value: str


@dataclass
class SetupParameters:
    """All parameter values of one setup"""

    flow_name: str
    parameters: List[SetupParameter] = Field(default_factory=list)
    setup_id: Optional[int] = None

    def get(self, parameter_name: str, component: str = "") -> Optional[SetupParameter]:
        for parameter in self.parameters:
            if parameter.component == component and parameter.parameter_name == parameter_name:
                return parameter
        return None

    def for_component(self, component: str) -> Dict[str, SetupParameter]:
        """Parameters of one component, keyed by parameter name"""
        return {
            parameter.parameter_name: parameter for parameter in self.parameters if parameter.component == component
        }


def serialize_setup(instance: AlgorithmInstance, flow: Optional[Flow] = None) -> SetupParameters:
    """
    Record the parameter values of a configured instance

    Args:
        instance: Configured algorithm tree
        flow: Flow the setup belongs to. Defaults to the flow of ``instance``
            itself; any flow with the same composite name fits

    Raises:
        SetupMismatch: If ``flow`` describes a differently shaped tree
    """
    if flow is None:
        flow = serialize_classifier(instance)
    if FlowName.parse(flow.name) != FlowName.of(instance):
        raise SetupMismatch(f"Instance {FlowName.of(instance)} does not fit flow {flow.name}")

    parameters = []
    for component, flow_node, instance_node in _iter_aligned(flow, instance):
        values = serialize_classifier(instance_node).parameters_as_dict()
        for parameter in flow_node.parameters:
            if parameter.name not in values:
                raise SetupMismatch(f"Flow {flow_node.name} has parameter {parameter.name} unknown to {instance_node.class_id}")
            parameters.append(
                SetupParameter(
                    component=component,
                    flow_name=flow_node.name,
                    parameter_name=parameter.name,
                    data_type=parameter.data_type,
                    default_value=parameter.default_value,
                    value=values[parameter.name].default_value,
                )
            )

    return SetupParameters(flow_name=flow.name, parameters=parameters)


def deserialize_setup(setup: SetupParameters, flow: Flow) -> AlgorithmInstance:
    """
    Reconstruct the instance a setup was recorded from

    Values for the root flow override the flow's defaults; composite values
    carry the complete configuration of their sub-algorithms, so values
    recorded for components must agree with them.

    Raises:
        SetupMismatch: If the setup references components or parameters the
            flow does not have, its values describe a differently shaped tree,
            or a component value contradicts the root's composite value
    """
    if setup.flow_name != flow.name:
        raise SetupMismatch(f"Setup belongs to flow {setup.flow_name}, not {flow.name}")

    components = dict(flow.iter_components())
    for parameter in setup.parameters:
        flow_node = components.get(parameter.component)
        if flow_node is None:
            raise SetupMismatch(f"Flow {flow.name} has no component {parameter.component!r}")
        if flow_node.get_parameter(parameter.parameter_name) is None:
            raise SetupMismatch(f"Flow {flow_node.name} has no parameter {parameter.parameter_name}")

    root_values = setup.for_component("")
    logger.debug(f"Applying {len(root_values)} setup values to flow {flow.name}")
    configured = dataclasses.replace(
        flow,
        parameters=[
            _with_value(parameter, root_values[parameter.name].value) if parameter.name in root_values else parameter
            for parameter in flow.parameters
        ],
    )

    try:
        instance = deserialize_classifier(configured)
    except MalformedParameterEncoding as e:
        raise SetupMismatch(f"Setup does not fit flow {flow.name}: {e}") from e

    # Component values must agree with what the root's composite values encode
    encoded = serialize_setup(instance, flow)
    for parameter in setup.parameters:
        if not parameter.component:
            continue
        actual = encoded.get(parameter.parameter_name, parameter.component)
        if actual.value != parameter.value:
            raise SetupMismatch(
                f"Setup value {parameter.value!r} for {parameter.component}/{parameter.parameter_name} "
                f"contradicts the root's composite value, which gives {actual.value!r}"
            )

    return instance


def _with_value(parameter: FlowParameter, value: str) -> FlowParameter:
    return dataclasses.replace(parameter, default_value=value)


def _iter_aligned(flow: Flow, instance: AlgorithmInstance, path: str = "") -> Iterator[Tuple[str, Flow, AlgorithmInstance]]:
    yield path, flow, instance
    for component, (_, child) in zip(flow.components, instance.children()):
        child_path = f"{path}/{component.identifier}" if path else component.identifier
        yield from _iter_aligned(component.flow, child, child_path)
