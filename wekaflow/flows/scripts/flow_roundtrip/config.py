import os
from typing import List, Optional

import yaml
from pydantic.dataclasses import dataclass

from wekaflow.flows.config import BridgeConfig
from wekaflow.shared.algorithms import AlgorithmRegistry
from wekaflow.shared.algorithms.options import split_spec_string


@dataclass(frozen=True)
class AlgorithmEntry:
    """One algorithm tree to round-trip, given as ``"<class id> <options>"``"""

    algorithm: str
    name: Optional[str] = None
    enabled: bool = True

    def get_name(self) -> str:
        """Get entry name, defaulting to the algorithm's class id"""
        if self.name:
            return self.name
        return split_spec_string(self.algorithm)[0]


@dataclass(frozen=True)
class RoundTripConfig:
    """Configuration for flow round-trip checks"""

    bridge: BridgeConfig = None
    algorithms: List[AlgorithmEntry] = None
    output_report_path: str = "flow_roundtrip_results.csv"

    def __post_init__(self):
        if self.bridge is None:
            object.__setattr__(self, "bridge", BridgeConfig())
        if self.algorithms is None:
            object.__setattr__(self, "algorithms", [])

    @classmethod
    def from_yaml(cls, config_file: str) -> "RoundTripConfig":
        """
        Load configuration from YAML file

        Example:
            connection: "store=directory; store_path=flows; use_sentinel=true"
            tags: [OpenmlWeka, weka]
            algorithms:
              - algorithm: "weka.classifiers.trees.J48 -C 0.03 -M 10"
              - name: bagged_tree
                algorithm: "Bagging -I 20 -W weka.classifiers.trees.J48"
            output_report_path: "flow_roundtrip_results.csv"
        """
        if not os.path.exists(config_file):
            raise ValueError(f"Config file does not exist: {config_file}")

        with open(config_file, "r") as f:
            config_dict = yaml.safe_load(f) or {}

        # Connection string first, explicit keys override it
        bridge_dict = {}
        if config_dict.get("connection"):
            bridge = BridgeConfig.from_string(config_dict["connection"])
            bridge_dict = {
                "store": bridge.store,
                "store_path": bridge.store_path,
                "tags": bridge.tags,
                "use_sentinel": bridge.use_sentinel,
            }
        for key in ("store", "store_path", "tags", "use_sentinel"):
            if key in config_dict:
                bridge_dict[key] = config_dict[key]

        algorithms = []
        for algo_config in config_dict.get("algorithms", []):
            if isinstance(algo_config, str):
                algorithms.append(AlgorithmEntry(algorithm=algo_config))
            else:
                algorithms.append(
                    AlgorithmEntry(
                        algorithm=algo_config["algorithm"],
                        name=algo_config.get("name"),
                        enabled=algo_config.get("enabled", True),
                    )
                )

        # Convert relative paths to absolute for output
        output_report_path = config_dict.get("output_report_path", "flow_roundtrip_results.csv")
        if not os.path.isabs(output_report_path):
            output_report_path = os.path.abspath(output_report_path)

        return cls(
            bridge=BridgeConfig.from_dict(bridge_dict),
            algorithms=algorithms,
            output_report_path=output_report_path,
        )

    def get_enabled_algorithms(self) -> List[AlgorithmEntry]:
        """Get only enabled algorithm entries"""
        return [entry for entry in self.algorithms if entry.enabled]

    def validate(self) -> None:
        """Validate configuration"""
        self.bridge.validate()

        enabled = self.get_enabled_algorithms()
        if not enabled:
            raise ValueError("No algorithms are enabled")

        names = [entry.get_name() for entry in enabled]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate algorithm entry names: {duplicates}")

        for entry in enabled:
            class_id, _ = split_spec_string(entry.algorithm)
            AlgorithmRegistry.resolve(class_id)

        output_dir = os.path.dirname(self.output_report_path)
        if output_dir and not os.path.exists(output_dir):
            raise ValueError(f"Output directory does not exist: {output_dir}")
