"""Flow stores: where flows are uploaded to and downloaded from"""

from .base import FlowStore
from .memory import InMemoryFlowStore
from .directory import DirectoryFlowStore
from .factory import FlowStoreFactory

__all__ = [
    "FlowStore",
    "InMemoryFlowStore",
    "DirectoryFlowStore",
    "FlowStoreFactory",
]
