import os
from typing import Any, Dict, List, Optional

import yaml
from pydantic.dataclasses import dataclass

from .store import FlowStore, FlowStoreFactory

DEFAULT_TAGS = ["OpenmlWeka", "weka"]

_TRUE_VALUES = ("true", "yes", "1", "on")
_FALSE_VALUES = ("false", "no", "0", "off")


@dataclass(frozen=True)
class BridgeConfig:
    """Where flows are stored and how they are tagged"""

    store: str = "memory"
    store_path: Optional[str] = None
    tags: List[str] = None
    use_sentinel: bool = True

    def __post_init__(self):
        if self.tags is None:
            object.__setattr__(self, "tags", list(DEFAULT_TAGS))

    @classmethod
    def from_string(cls, config_string: str) -> "BridgeConfig":
        """
        Parse a ``key=value; key=value`` configuration string

        Example:
            ``store=directory; store_path=/tmp/flows; tags=OpenmlWeka,weka; use_sentinel=false``

        Raises:
            ValueError: On entries without ``=`` or unknown keys
        """
        entries = {}
        for entry in config_string.split(";"):
            entry = entry.strip()
            if not entry:
                continue
            if "=" not in entry:
                raise ValueError(f"Config entry must have the form key=value, got: {entry}")
            key, value = entry.split("=", 1)
            entries[key.strip()] = value.strip()
        return cls.from_dict(entries)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "BridgeConfig":
        known = {"store", "store_path", "tags", "use_sentinel"}
        unknown = sorted(set(config_dict) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {unknown}. Available: {sorted(known)}")

        tags = config_dict.get("tags")
        if isinstance(tags, str):
            tags = [tag.strip() for tag in tags.split(",") if tag.strip()]

        store_path = config_dict.get("store_path")
        if store_path and not os.path.isabs(store_path):
            store_path = os.path.abspath(store_path)

        kwargs = {
            "store": config_dict.get("store", "memory"),
            "store_path": store_path,
            "use_sentinel": _parse_bool(config_dict.get("use_sentinel", True)),
        }
        if tags is not None:
            kwargs["tags"] = list(tags)

        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, config_file: str) -> "BridgeConfig":
        """Load configuration from YAML file"""
        if not os.path.exists(config_file):
            raise ValueError(f"Config file does not exist: {config_file}")

        with open(config_file, "r") as f:
            config_dict = yaml.safe_load(f) or {}

        return cls.from_dict(config_dict)

    def validate(self) -> None:
        """Validate configuration"""
        if self.store.lower() not in FlowStoreFactory.get_available_stores():
            available = list(FlowStoreFactory.get_available_stores().keys())
            raise ValueError(f"Unknown flow store: {self.store}. Available: {available}")

        if self.store.lower() in ("directory", "dir") and not self.store_path:
            raise ValueError("store_path is required for a directory flow store")

    def create_store(self) -> FlowStore:
        """Create the configured flow store"""
        self.validate()
        if self.store.lower() in ("directory", "dir"):
            return FlowStoreFactory.create(self.store, path=self.store_path)
        return FlowStoreFactory.create(self.store)


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if str(value).lower() in _TRUE_VALUES:
        return True
    if str(value).lower() in _FALSE_VALUES:
        return False
    raise ValueError(f"Expected a boolean, got: {value}")
