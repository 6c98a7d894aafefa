import logging
from typing import Dict, Iterable, List, Optional, Sequence

from .base import AlgorithmInstance, AlgorithmKind, AlgorithmSpec, SlotEncoding, SlotSpec, SlotValue
from .catalog import ALGORITHM_SPECS
from .errors import OptionParseError, UnknownAlgorithmClass
from .options import OPTION_SEPARATOR, partition_options, split_spec_string

logger = logging.getLogger(__name__)


class AlgorithmRegistry:
    """Registry mapping class identifiers to algorithm specifications"""

    _specs: Dict[str, AlgorithmSpec] = {spec.class_id: spec for spec in ALGORITHM_SPECS}

    # Short names ("j48", "bagging", ...) accepted wherever a class id is
    _aliases: Dict[str, str] = {spec.short_name.lower(): spec.class_id for spec in ALGORITHM_SPECS}

    @classmethod
    def resolve(cls, class_id: str) -> str:
        """
        Resolve a class id or alias to the registered class id

        Raises:
            UnknownAlgorithmClass: If nothing is registered under that name
        """
        if class_id in cls._specs:
            return class_id
        alias = class_id.lower()
        if alias in cls._aliases:
            return cls._aliases[alias]
        raise UnknownAlgorithmClass(class_id, cls._specs.keys())

    @classmethod
    def get_spec(cls, class_id: str) -> AlgorithmSpec:
        """Get the specification registered for a class id or alias"""
        return cls._specs[cls.resolve(class_id)]

    @classmethod
    def get_available_algorithms(cls, kind: Optional[AlgorithmKind] = None) -> Dict[str, AlgorithmSpec]:
        """Get dictionary of registered algorithms, optionally restricted to one kind"""
        return {class_id: spec for class_id, spec in cls._specs.items() if kind is None or spec.kind == kind}

    @classmethod
    def register(cls, spec: AlgorithmSpec, aliases: Iterable[str] = ()) -> None:
        """
        Register a new algorithm type

        Args:
            spec: Specification of the algorithm
            aliases: Additional names the algorithm can be created by. The
                lowercase short name is always registered
        """
        if spec.class_id in cls._specs:
            logger.debug(f"Replacing registered algorithm {spec.class_id}")
        cls._specs[spec.class_id] = spec
        for alias in [spec.short_name, *aliases]:
            cls._aliases[alias.lower()] = spec.class_id

    @classmethod
    def unregister(cls, class_id: str) -> None:
        """Remove an algorithm type and its aliases"""
        class_id = cls.resolve(class_id)
        del cls._specs[class_id]
        for alias in [alias for alias, target in cls._aliases.items() if target == class_id]:
            del cls._aliases[alias]

    @classmethod
    def instantiate(cls, class_id: str) -> AlgorithmInstance:
        """
        Create an instance with default options and default sub-algorithms

        Raises:
            UnknownAlgorithmClass: If the class id is not registered
        """
        instance = AlgorithmInstance(cls.get_spec(class_id))
        cls.apply_options(instance, [])
        return instance

    @classmethod
    def create(cls, class_id: str, options: Optional[Sequence[str]] = None) -> AlgorithmInstance:
        """Create an instance and configure it from option tokens"""
        instance = cls.instantiate(class_id)
        if options:
            cls.apply_options(instance, options)
        return instance

    @classmethod
    def from_spec_string(cls, spec_string: str) -> AlgorithmInstance:
        """Create an instance from ``"<class id> <options>"``"""
        class_id, options = split_spec_string(spec_string)
        return cls.create(class_id, options)

    @classmethod
    def apply_options(cls, instance: AlgorithmInstance, tokens: Sequence[str]) -> None:
        """
        Configure an instance from Weka-style option tokens

        Every option and slot not mentioned in ``tokens`` is reset to its
        default, so the instance afterwards depends on ``tokens`` alone.

        Args:
            instance: Instance to configure in place
            tokens: Flat option tokens as produced by ``get_options``

        Raises:
            OptionParseError: On unknown, repeated or incomplete options
            UnknownAlgorithmClass: If a nested algorithm is not registered
        """
        spec = instance.spec
        head = list(tokens)
        tail: List[str] = []
        wrapped_slot = spec.wrapped_slot

        values = {}
        children: Dict[str, SlotValue] = {}
        wrapped_class = None
        seen = set()

        i = 0
        while i < len(head):
            token = head[i]
            # "--" only separates the wrapped classifier's options where a flag is expected
            if token == OPTION_SEPARATOR:
                _, tail = partition_options(head[i:])
                break
            if len(token) < 2 or not token.startswith("-"):
                raise OptionParseError(f"Unexpected token {token!r} in options for {spec.class_id}")
            flag = token[1:]
            option = spec.get_option_spec(flag)
            slot = spec.get_slot_spec(flag)

            if option is None and slot is None:
                raise OptionParseError(f"Unknown option -{flag} for {spec.class_id}")
            repeatable = slot is not None and slot.is_list
            if flag in seen and not repeatable:
                raise OptionParseError(f"Option -{flag} given more than once for {spec.class_id}")
            seen.add(flag)

            if option is not None and option.is_flag:
                values[flag] = True
                i += 1
                continue

            if i + 1 >= len(head):
                raise OptionParseError(f"Option -{flag} of {spec.class_id} is missing its value")
            value = head[i + 1]
            i += 2

            if option is not None:
                values[flag] = value
            elif slot.encoding == SlotEncoding.WRAPPED:
                wrapped_class = value
            elif slot.is_list:
                children.setdefault(flag, []).append(cls.from_spec_string(value))
            else:
                children[flag] = cls.from_spec_string(value)

        if tail and wrapped_slot is None:
            raise OptionParseError(f"{spec.class_id} does not wrap a classifier, unexpected options after '--': {tail}")
        if wrapped_slot is not None and (wrapped_class is not None or tail):
            children[wrapped_slot.flag] = cls.create(wrapped_class or wrapped_slot.default[0], tail)

        for option in spec.options:
            instance.set_option(option.flag, values.get(option.flag, option.default_value))

        for slot in spec.slots:
            child = children[slot.flag] if slot.flag in children else cls._default_child(slot)
            try:
                instance.set_slot(slot.flag, child)
            except OptionParseError:
                raise
            except ValueError as e:
                raise OptionParseError(str(e)) from e

    @classmethod
    def _default_child(cls, slot: SlotSpec) -> SlotValue:
        if slot.is_list:
            return [cls.from_spec_string(default) for default in slot.default]
        return cls.from_spec_string(slot.default[0])

    @classmethod
    def get_options(cls, instance: AlgorithmInstance) -> List[str]:
        return instance.get_options()

    @classmethod
    def get_slot(cls, instance: AlgorithmInstance, flag: str) -> SlotValue:
        return instance.get_slot(flag)

    @classmethod
    def set_slot(cls, instance: AlgorithmInstance, flag: str, child: SlotValue) -> None:
        instance.set_slot(flag, child)
