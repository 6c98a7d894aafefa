import dataclasses
from typing import Any, Dict, Iterator, List, Optional, Tuple

import yaml
from pydantic import Field
from pydantic.dataclasses import dataclass, rebuild_dataclass


@dataclass
class FlowParameter:
    """A declared parameter of a flow and its default value"""

    name: str
    data_type: str
    default_value: str
    description: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "name": self.name,
            "data_type": self.data_type,
            "default_value": self.default_value,
            "description": self.description,
        }


@dataclass
class Flow:
    """
    Description of an algorithm configuration, suitable for storage and reconstruction

    The textual form (:meth:`to_yaml`) is canonical: serializing the same
    algorithm tree twice yields byte-identical text.
    """

    name: str
    class_name: str
    external_version: str
    description: str = ""
    language: str = "English"
    dependencies: str = ""
    tags: List[str] = Field(default_factory=list)
    parameters: List[FlowParameter] = Field(default_factory=list)
    components: List["FlowComponent"] = Field(default_factory=list)
    flow_id: Optional[int] = None

    def get_parameter(self, name: str) -> Optional[FlowParameter]:
        for parameter in self.parameters:
            if parameter.name == name:
                return parameter
        return None

    def parameters_as_dict(self) -> Dict[str, FlowParameter]:
        """Parameters keyed by name"""
        return {parameter.name: parameter for parameter in self.parameters}

    def get_component(self, identifier: str) -> Optional["Flow"]:
        for component in self.components:
            if component.identifier == identifier:
                return component.flow
        return None

    def iter_components(self, path: str = "") -> Iterator[Tuple[str, "Flow"]]:
        """
        Iterate over this flow and all sub-flows, depth first

        Yields:
            (component path, flow) pairs. The root has the empty path, a sub-flow
            the identifiers leading to it joined by "/", e.g. "W/K"
        """
        yield path, self
        for component in self.components:
            child_path = f"{path}/{component.identifier}" if path else component.identifier
            yield from component.flow.iter_components(child_path)

    def with_name(self, name: str) -> "Flow":
        """Copy of this flow under a different name"""
        return dataclasses.replace(self, name=name)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.flow_id is not None:
            result["flow_id"] = self.flow_id
        result.update(
            {
                "name": self.name,
                "class_name": self.class_name,
                "external_version": self.external_version,
                "description": self.description,
                "language": self.language,
                "dependencies": self.dependencies,
                "tags": list(self.tags),
                "parameters": [parameter.to_dict() for parameter in self.parameters],
                "components": [component.to_dict() for component in self.components],
            }
        )
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Flow":
        return cls(
            name=data["name"],
            class_name=data["class_name"],
            external_version=data["external_version"],
            description=data.get("description", ""),
            language=data.get("language", "English"),
            dependencies=data.get("dependencies", ""),
            tags=list(data.get("tags") or []),
            parameters=[FlowParameter(**parameter) for parameter in data.get("parameters") or []],
            components=[FlowComponent.from_dict(component) for component in data.get("components") or []],
            flow_id=data.get("flow_id"),
        )

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False, default_flow_style=False, allow_unicode=True, width=4096)

    @classmethod
    def from_yaml(cls, text: str) -> "Flow":
        data = yaml.safe_load(text)
        if not isinstance(data, dict):
            raise ValueError("Flow YAML must contain a mapping")
        return cls.from_dict(data)


@dataclass
class FlowComponent:
    """A sub-flow bound to one of the parent's composite parameters"""

    identifier: str
    flow: Flow

    def to_dict(self) -> Dict[str, Any]:
        return {"identifier": self.identifier, "flow": self.flow.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FlowComponent":
        return cls(identifier=data["identifier"], flow=Flow.from_dict(data["flow"]))


rebuild_dataclass(Flow)
rebuild_dataclass(FlowComponent)
