"""Error types raised while building, configuring and (de)serializing algorithms"""


class WekaFlowError(ValueError):
    """Base class for all wekaflow errors"""


class UnknownAlgorithmClass(WekaFlowError):
    """A class identifier has no entry in the algorithm registry"""

    def __init__(self, class_id: str, available=None):
        self.class_id = class_id
        message = f"Unknown algorithm class: {class_id}"
        if available is not None:
            message += f". Available: {sorted(available)}"
        super().__init__(message)


class OptionParseError(WekaFlowError):
    """Option tokens that an algorithm's option schema cannot consume"""
