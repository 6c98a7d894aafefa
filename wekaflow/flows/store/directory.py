import dataclasses
import logging
import os
from typing import List

from ..errors import FlowNotFound
from ..flow import Flow
from .base import FlowStore

logger = logging.getLogger(__name__)

FLOW_FILE_SUFFIX = ".yaml"


class DirectoryFlowStore(FlowStore):
    """Flow store writing one YAML file per flow, named by its identifier"""

    def __init__(self, path: str):
        """
        Initialize directory store.

        Args:
            path: Directory holding the flow files. Created if it does not exist
        """
        self.path = path
        self._ensure_directory()

    def _ensure_directory(self) -> None:
        if not os.path.exists(self.path):
            os.makedirs(self.path)
            logger.debug(f"Created flow store directory: {self.path}")
        elif not os.path.isdir(self.path):
            raise ValueError(f"Flow store path is not a directory: {self.path}")

    def _flow_file(self, flow_id: int) -> str:
        return os.path.join(self.path, f"{flow_id}{FLOW_FILE_SUFFIX}")

    def upload(self, flow: Flow) -> int:
        existing = self.list_ids()
        flow_id = existing[-1] + 1 if existing else 1

        with open(self._flow_file(flow_id), "w") as f:
            f.write(dataclasses.replace(flow, flow_id=None).to_yaml())

        logger.debug(f"Wrote flow {flow.name} to {self._flow_file(flow_id)}")
        return flow_id

    def get(self, flow_id: int) -> Flow:
        flow_file = self._flow_file(flow_id)
        if not os.path.exists(flow_file):
            raise FlowNotFound(flow_id)

        with open(flow_file, "r") as f:
            flow = Flow.from_yaml(f.read())

        return dataclasses.replace(flow, flow_id=flow_id)

    def list_ids(self) -> List[int]:
        flow_ids = []
        for file_name in os.listdir(self.path):
            stem, suffix = os.path.splitext(file_name)
            if suffix == FLOW_FILE_SUFFIX and stem.isdigit():
                flow_ids.append(int(stem))
        return sorted(flow_ids)
