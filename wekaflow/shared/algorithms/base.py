from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple, Union

from pydantic.dataclasses import dataclass

from .errors import OptionParseError
from .options import OPTION_SEPARATOR, join_options


class AlgorithmKind(str, Enum):
    """What an algorithm is, and therefore which slots it may be bound to"""

    CLASSIFIER = "classifier"
    KERNEL = "kernel"
    FILTER = "filter"
    NEIGHBOUR_SEARCH = "neighbour_search"
    DISTANCE = "distance"


class SlotEncoding(str, Enum):
    """How a slot's sub-algorithm appears in the parent's option tokens"""

    QUOTED = "quoted"  # -K "<class> <options>"
    WRAPPED = "wrapped"  # -W <class> -- <options>
    LIST = "list"  # -F "<class> <options>" repeated once per child


OPTION_VALUE_TYPES = ("flag", "int", "float", "str")


@dataclass(frozen=True)
class OptionSpec:
    """A scalar option: either a boolean flag or a ``-x value`` pair"""

    flag: str
    value_type: str = "str"
    default: Optional[str] = None
    description: str = ""

    def __post_init__(self):
        if self.value_type not in OPTION_VALUE_TYPES:
            raise ValueError(f"Unknown option value type: {self.value_type}. Available: {list(OPTION_VALUE_TYPES)}")
        if self.value_type != "flag" and self.default is None:
            raise ValueError(f"Option -{self.flag} needs a default value")

    @property
    def is_flag(self) -> bool:
        return self.value_type == "flag"

    @property
    def default_value(self) -> Union[bool, str]:
        if self.is_flag:
            return self.default == "true"
        return self.default


@dataclass(frozen=True)
class SlotSpec:
    """A named attachment point for sub-algorithms"""

    flag: str
    kind: AlgorithmKind
    encoding: SlotEncoding = SlotEncoding.QUOTED
    default: Tuple[str, ...] = ()
    description: str = ""

    def __post_init__(self):
        if self.encoding != SlotEncoding.LIST and len(self.default) != 1:
            raise ValueError(f"Slot -{self.flag} needs exactly one default algorithm, got {len(self.default)}")

    @property
    def is_list(self) -> bool:
        return self.encoding == SlotEncoding.LIST


@dataclass(frozen=True)
class AlgorithmSpec:
    """
    Structural record describing one algorithm type

    Args:
        class_id: Fully qualified class identifier, used as flow name
        kind: What the algorithm is (classifier, kernel, filter, ...)
        options: Scalar options
        slots: Sub-algorithm slots, in the order children appear in flow names
        layout: Order of flags in the option tokens. Defaults to options, then
            quoted/list slots, then the wrapped slot
        description: Human readable description, copied into flows
    """

    class_id: str
    kind: AlgorithmKind
    options: Tuple[OptionSpec, ...] = ()
    slots: Tuple[SlotSpec, ...] = ()
    layout: Tuple[str, ...] = ()
    description: str = ""

    def __post_init__(self):
        flags = [option.flag for option in self.options] + [slot.flag for slot in self.slots]
        if len(flags) != len(set(flags)):
            raise ValueError(f"Duplicate option flags in {self.class_id}: {flags}")

        if not self.layout:
            wrapped = [slot.flag for slot in self.slots if slot.encoding == SlotEncoding.WRAPPED]
            others = [slot.flag for slot in self.slots if slot.encoding != SlotEncoding.WRAPPED]
            object.__setattr__(self, "layout", tuple([option.flag for option in self.options] + others + wrapped))
        elif sorted(self.layout) != sorted(flags):
            raise ValueError(f"Layout of {self.class_id} must list every flag exactly once")

        wrapped = [slot for slot in self.slots if slot.encoding == SlotEncoding.WRAPPED]
        if len(wrapped) > 1:
            raise ValueError(f"{self.class_id} can wrap at most one classifier")
        if wrapped and self.layout[-1] != wrapped[0].flag:
            raise ValueError(f"Wrapped slot -{wrapped[0].flag} of {self.class_id} must come last in the layout")

    @property
    def short_name(self) -> str:
        return self.class_id.rsplit(".", 1)[-1]

    @property
    def wrapped_slot(self) -> Optional[SlotSpec]:
        for slot in self.slots:
            if slot.encoding == SlotEncoding.WRAPPED:
                return slot
        return None

    def get_option_spec(self, flag: str) -> Optional[OptionSpec]:
        for option in self.options:
            if option.flag == flag:
                return option
        return None

    def get_slot_spec(self, flag: str) -> Optional[SlotSpec]:
        for slot in self.slots:
            if slot.flag == flag:
                return slot
        return None


SlotValue = Union[None, "AlgorithmInstance", List["AlgorithmInstance"]]


class AlgorithmInstance:
    """
    A configured algorithm: option values plus owned sub-algorithms

    Instances form a strict tree. Children bound with :meth:`set_slot` are
    copied, so a parent never shares a subtree with anyone else.
    """

    def __init__(self, spec: AlgorithmSpec):
        self.spec = spec
        self._values: Dict[str, Union[bool, str]] = {option.flag: option.default_value for option in spec.options}
        self._slots: Dict[str, SlotValue] = {slot.flag: ([] if slot.is_list else None) for slot in spec.slots}

    @property
    def class_id(self) -> str:
        return self.spec.class_id

    @property
    def short_name(self) -> str:
        return self.spec.short_name

    @property
    def kind(self) -> AlgorithmKind:
        return self.spec.kind

    def get_option(self, flag: str) -> Union[bool, str]:
        """Get the current value of a scalar option (bool for flags, str otherwise)"""
        if flag not in self._values:
            raise OptionParseError(f"{self.class_id} has no option -{flag}")
        return self._values[flag]

    def set_option(self, flag: str, value: Union[bool, int, float, str]) -> None:
        """
        Set a scalar option

        Args:
            flag: Option flag without the leading dash
            value: New value. Flags take a bool (or "true"/"false"); numeric
                options take numbers or numeric strings

        Raises:
            OptionParseError: If the option is unknown or the value has the wrong type
        """
        option = self.spec.get_option_spec(flag)
        if option is None:
            raise OptionParseError(f"{self.class_id} has no option -{flag}")
        self._values[flag] = _coerce_option_value(option, value, self.class_id)

    def get_slot(self, flag: str) -> SlotValue:
        """Get the sub-algorithm (or list of sub-algorithms) bound to a slot"""
        if flag not in self._slots:
            raise OptionParseError(f"{self.class_id} has no slot -{flag}")
        value = self._slots[flag]
        if isinstance(value, list):
            return list(value)
        return value

    def set_slot(self, flag: str, child: SlotValue) -> None:
        """
        Bind a copy of ``child`` to a slot

        List slots take a non-empty sequence of instances, the other slots a
        single one. Slots cannot be emptied, since option tokens have no way to
        express an unbound slot.

        Raises:
            OptionParseError: If the slot is unknown
            ValueError: If a child has the wrong kind for the slot
        """
        slot = self.spec.get_slot_spec(flag)
        if slot is None:
            raise OptionParseError(f"{self.class_id} has no slot -{flag}")

        if slot.is_list:
            if child is None or isinstance(child, AlgorithmInstance):
                raise ValueError(f"Slot -{flag} of {self.class_id} takes a list of {slot.kind.value} instances")
            children = list(child)
            if not children:
                raise ValueError(f"Slot -{flag} of {self.class_id} needs at least one {slot.kind.value}")
            for item in children:
                self._check_child(slot, item)
            self._slots[flag] = [item.copy() for item in children]
        else:
            if child is None:
                raise ValueError(f"Slot -{flag} of {self.class_id} needs a {slot.kind.value}")
            self._check_child(slot, child)
            self._slots[flag] = child.copy()

    def _check_child(self, slot: SlotSpec, child: "AlgorithmInstance") -> None:
        if not isinstance(child, AlgorithmInstance):
            raise ValueError(f"Slot -{slot.flag} of {self.class_id} takes algorithm instances, got {type(child)}")
        if child.kind != slot.kind:
            raise ValueError(
                f"Slot -{slot.flag} of {self.class_id} expects a {slot.kind.value}, "
                f"got {child.class_id} ({child.kind.value})"
            )

    def children(self) -> List[Tuple[str, "AlgorithmInstance"]]:
        """Bound sub-algorithms as (slot flag, instance) pairs, in slot order"""
        result = []
        for slot in self.spec.slots:
            value = self._slots[slot.flag]
            if isinstance(value, list):
                result.extend((slot.flag, child) for child in value)
            elif value is not None:
                result.append((slot.flag, value))
        return result

    def walk(self) -> Iterator["AlgorithmInstance"]:
        """Iterate over this instance and all its descendants, depth first"""
        yield self
        for _, child in self.children():
            yield from child.walk()

    def get_options(self) -> List[str]:
        """
        Get the flat option tokens describing this instance and its subtree

        Returns:
            Option tokens, in the order given by ``AlgorithmSpec.layout``
        """
        tokens = []
        wrapped_tokens = []

        for flag in self.spec.layout:
            if flag in self._values:
                value = self._values[flag]
                if isinstance(value, bool):
                    if value:
                        tokens.append(f"-{flag}")
                else:
                    tokens.extend([f"-{flag}", value])
                continue

            slot = self.spec.get_slot_spec(flag)
            value = self._slots[flag]
            if slot.encoding == SlotEncoding.WRAPPED:
                if value is not None:
                    tokens.extend([f"-{flag}", value.class_id])
                    wrapped_tokens = value.get_options()
            elif slot.is_list:
                for child in value:
                    tokens.extend([f"-{flag}", child.to_spec_string()])
            elif value is not None:
                tokens.extend([f"-{flag}", value.to_spec_string()])

        if wrapped_tokens:
            tokens.append(OPTION_SEPARATOR)
            tokens.extend(wrapped_tokens)

        return tokens

    def to_spec_string(self) -> str:
        """``"<class id> <joined options>"``, the form nested algorithms take inside option tokens"""
        return self.class_id + " " + join_options(self.get_options())

    def copy(self) -> "AlgorithmInstance":
        clone = AlgorithmInstance(self.spec)
        clone._values = dict(self._values)
        for flag, value in self._slots.items():
            if isinstance(value, list):
                clone._slots[flag] = [child.copy() for child in value]
            elif value is not None:
                clone._slots[flag] = value.copy()
        return clone

    def __eq__(self, other) -> bool:
        if not isinstance(other, AlgorithmInstance):
            return NotImplemented
        return self.class_id == other.class_id and self.get_options() == other.get_options()

    def __repr__(self) -> str:
        return f"AlgorithmInstance({self.to_spec_string().strip()!r})"


def _coerce_option_value(option: OptionSpec, value, class_id: str) -> Union[bool, str]:
    if option.is_flag:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.lower() in ("true", "false"):
            return value.lower() == "true"
        raise OptionParseError(f"Flag -{option.flag} of {class_id} takes a boolean, got {value!r}")

    if isinstance(value, bool):
        raise OptionParseError(f"Option -{option.flag} of {class_id} takes a {option.value_type}, got {value!r}")

    if option.value_type == "int":
        try:
            int(str(value))
        except (TypeError, ValueError):
            raise OptionParseError(f"Option -{option.flag} of {class_id} takes an int, got {value!r}")
    elif option.value_type == "float":
        try:
            float(str(value))
        except (TypeError, ValueError):
            raise OptionParseError(f"Option -{option.flag} of {class_id} takes a float, got {value!r}")

    return str(value)
