from abc import ABC, abstractmethod
from typing import List, Optional

from ..flow import Flow


class FlowStore(ABC):
    """Abstract base class for places flows are uploaded to and downloaded from"""

    @abstractmethod
    def upload(self, flow: Flow) -> int:
        """
        Store a flow

        Args:
            flow: Flow to store. Any ``flow_id`` it carries is ignored

        Returns:
            Identifier assigned to the stored flow
        """
        pass

    @abstractmethod
    def get(self, flow_id: int) -> Flow:
        """
        Retrieve a stored flow

        Args:
            flow_id: Identifier returned by :meth:`upload`

        Returns:
            The stored flow, with ``flow_id`` set

        Raises:
            FlowNotFound: If nothing is stored under ``flow_id``
        """
        pass

    @abstractmethod
    def list_ids(self) -> List[int]:
        """Identifiers of all stored flows, in ascending order"""
        pass

    def find(self, name: str, external_version: str) -> Optional[int]:
        """Identifier of a stored flow with this name and external version, if any"""
        for flow_id in self.list_ids():
            flow = self.get(flow_id)
            if flow.name == name and flow.external_version == external_version:
                return flow_id
        return None

    def __len__(self) -> int:
        return len(self.list_ids())
