import dataclasses
import logging
from typing import Dict, List

from ..errors import FlowNotFound
from ..flow import Flow
from .base import FlowStore

logger = logging.getLogger(__name__)


class InMemoryFlowStore(FlowStore):
    """Flow store keeping the textual form of each flow in a dict"""

    def __init__(self):
        self._flows: Dict[int, str] = {}
        self._next_id = 1

    def upload(self, flow: Flow) -> int:
        flow_id = self._next_id
        self._next_id += 1
        self._flows[flow_id] = dataclasses.replace(flow, flow_id=None).to_yaml()
        logger.debug(f"Stored flow {flow.name} as {flow_id}")
        return flow_id

    def get(self, flow_id: int) -> Flow:
        if flow_id not in self._flows:
            raise FlowNotFound(flow_id)
        return dataclasses.replace(Flow.from_yaml(self._flows[flow_id]), flow_id=flow_id)

    def list_ids(self) -> List[int]:
        return sorted(self._flows)
