from typing import Any, Dict, Type

from .base import FlowStore
from .directory import DirectoryFlowStore
from .memory import InMemoryFlowStore


class FlowStoreFactory:
    """Factory for creating flow stores"""

    _stores: Dict[str, Type[FlowStore]] = {
        "memory": InMemoryFlowStore,
        "in-memory": InMemoryFlowStore,
        "directory": DirectoryFlowStore,
        "dir": DirectoryFlowStore,
    }

    @classmethod
    def create(cls, store_type: str, **kwargs: Any) -> FlowStore:
        """
        Create flow store instance

        Args:
            store_type: Name of the store type
            **kwargs: Arguments for the store's constructor (e.g. ``path``)

        Returns:
            Flow store instance

        Raises:
            ValueError: If store type is unknown
        """
        store_type = store_type.lower()

        if store_type not in cls._stores:
            available = list(cls._stores.keys())
            raise ValueError(f"Unknown flow store: {store_type}. Available: {available}")

        return cls._stores[store_type](**kwargs)

    @classmethod
    def get_available_stores(cls) -> Dict[str, Type[FlowStore]]:
        """Get dictionary of available stores"""
        return cls._stores.copy()

    @classmethod
    def register_store(cls, name: str, store_class: Type[FlowStore]) -> None:
        """Register a new flow store type"""
        cls._stores[name.lower()] = store_class
