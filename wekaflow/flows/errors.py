from wekaflow.shared.algorithms.errors import WekaFlowError


class MalformedParameterEncoding(WekaFlowError):
    """A flow's name or parameter values cannot be turned back into algorithms"""


class SetupMismatch(WekaFlowError):
    """A setup references flows, parameters or algorithms that its flow does not have"""


class FlowNotFound(KeyError):
    """No flow stored under the requested id"""

    def __init__(self, flow_id: int):
        self.flow_id = flow_id
        super().__init__(f"No flow with id {flow_id}")
