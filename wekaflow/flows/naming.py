"""Composite flow names: ``Container(Child1,Child2(Grandchild))``"""

from dataclasses import dataclass
from typing import Iterator, Tuple

from wekaflow.shared.algorithms import AlgorithmInstance

from .errors import MalformedParameterEncoding

_DELIMITERS = "(),"


@dataclass(frozen=True)
class FlowName:
    """Parsed composite flow name: a class id and the names of its children in slot order"""

    class_id: str
    children: Tuple["FlowName", ...] = ()

    def __str__(self) -> str:
        if not self.children:
            return self.class_id
        return f"{self.class_id}({','.join(str(child) for child in self.children)})"

    @property
    def depth(self) -> int:
        """Number of container levels below this name"""
        if not self.children:
            return 0
        return 1 + max(child.depth for child in self.children)

    def walk(self) -> Iterator["FlowName"]:
        yield self
        for child in self.children:
            yield from child.walk()

    @classmethod
    def of(cls, instance: AlgorithmInstance) -> "FlowName":
        """Name of the flow describing ``instance``"""
        return cls(instance.class_id, tuple(cls.of(child) for _, child in instance.children()))

    @classmethod
    def parse(cls, name: str) -> "FlowName":
        """
        Parse a composite flow name

        Raises:
            MalformedParameterEncoding: If parentheses do not balance or a class id is empty
        """
        parsed, position = cls._parse_at(name, 0)
        if position != len(name):
            raise MalformedParameterEncoding(f"Unexpected {name[position]!r} at position {position} in flow name {name!r}")
        return parsed

    @classmethod
    def _parse_at(cls, name: str, position: int) -> Tuple["FlowName", int]:
        start = position
        while position < len(name) and name[position] not in _DELIMITERS:
            position += 1
        class_id = name[start:position].strip()
        if not class_id:
            raise MalformedParameterEncoding(f"Missing class name at position {start} in flow name {name!r}")

        if position == len(name) or name[position] != "(":
            return cls(class_id), position

        children = []
        position += 1
        while True:
            child, position = cls._parse_at(name, position)
            children.append(child)
            if position >= len(name):
                raise MalformedParameterEncoding(f"Unbalanced parentheses in flow name {name!r}")
            if name[position] == ",":
                position += 1
                continue
            if name[position] == ")":
                return cls(class_id, tuple(children)), position + 1
            raise MalformedParameterEncoding(f"Unexpected {name[position]!r} at position {position} in flow name {name!r}")
