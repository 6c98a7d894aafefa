#!/usr/bin/env python3
"""
Flow Round-Trip Script

Serializes each configured algorithm tree to a flow, uploads it to a flow
store, downloads it again, reconstructs the algorithm tree and checks that
nothing was lost on the way:

- the downloaded flow has the same parameter names as the uploaded one
- serializing the reconstructed tree gives byte-identical flow text
- the reconstructed tree has the same option tokens as the original

With ``use_sentinel`` enabled, a random suffix is appended to each flow name
before upload and stripped after download, so repeated runs never collide
with flows stored earlier.

Usage:
    python run.py --config path/to/config.yaml [--verbose]

Example config structure:
    connection: "store=directory; store_path=flows; use_sentinel=true"
    algorithms:
      - algorithm: "weka.classifiers.trees.J48 -C 0.03 -M 10"
      - name: bagged_svm
        algorithm: "Bagging -W weka.classifiers.functions.SMO -- -K \\"weka.classifiers.functions.supportVector.RBFKernel -G 0.32\\""
    output_report_path: "flow_roundtrip_results.csv"
"""

import logging
import sys
import uuid
from typing import Any, Dict, List

import click
from tqdm import tqdm

from wekaflow.flows import count_flow_components, deserialize_classifier, serialize_classifier
from wekaflow.flows.config import BridgeConfig
from wekaflow.flows.scripts.flow_roundtrip.config import AlgorithmEntry, RoundTripConfig
from wekaflow.flows.scripts.flow_roundtrip.report_manager import ReportManager
from wekaflow.flows.store import FlowStore
from wekaflow.shared.algorithms import AlgorithmRegistry

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")


def roundtrip_algorithm(entry: AlgorithmEntry, store: FlowStore, bridge: BridgeConfig) -> Dict[str, Any]:
    """
    Upload one algorithm's flow, download it and compare

    Args:
        entry: Algorithm to check
        store: Flow store to round-trip through
        bridge: Tagging and sentinel settings

    Returns:
        Report row for this algorithm
    """
    result = {"name": entry.get_name(), "algorithm": entry.algorithm, "success": False, "error_message": None}

    try:
        instance = AlgorithmRegistry.from_spec_string(entry.algorithm)
        uploaded = serialize_classifier(instance, bridge.tags)
        result["flow_name"] = uploaded.name
        result["n_components"] = count_flow_components(uploaded)
        result["n_parameters"] = len(uploaded.parameters)

        sentinel = "_" + uuid.uuid4().hex if bridge.use_sentinel else ""
        flow_id = store.upload(uploaded.with_name(uploaded.name + sentinel))
        result["flow_id"] = flow_id
        logger.debug(f"Uploaded {uploaded.name} as flow {flow_id}")

        downloaded = store.get(flow_id)
        if sentinel:
            downloaded = downloaded.with_name(downloaded.name[: downloaded.name.index(sentinel)])

        result["parameter_names_match"] = set(downloaded.parameters_as_dict()) == set(uploaded.parameters_as_dict())

        retrieved = deserialize_classifier(downloaded)
        reconstructed = serialize_classifier(retrieved, bridge.tags)
        result["flow_text_match"] = reconstructed.to_yaml() == uploaded.to_yaml()
        result["options_match"] = retrieved.get_options() == instance.get_options()

        result["success"] = result["parameter_names_match"] and result["flow_text_match"] and result["options_match"]
        if not result["success"]:
            logger.warning(f"Round-trip mismatch for {entry.get_name()} ({uploaded.name})")

    except (ValueError, KeyError) as e:
        logger.error(f"Round-trip failed for {entry.get_name()}: {e}")
        result["error_message"] = str(e)

    return result


def run_roundtrips(config: RoundTripConfig) -> List[Dict[str, Any]]:
    """Round-trip every enabled algorithm through the configured store"""
    store = config.bridge.create_store()
    entries = config.get_enabled_algorithms()
    logger.info(f"Round-tripping {len(entries)} algorithms through {config.bridge.store} store")

    return [roundtrip_algorithm(entry, store, config.bridge) for entry in tqdm(entries, desc="Round-tripping flows")]


@click.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, readable=True),
    required=True,
    help="Path to YAML configuration file",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging",
)
def main(config: str, verbose: bool):
    """
    Round-trip algorithm flows through a flow store and verify them.

    Examples:

        python run.py --config config.yaml

        python run.py --config config.yaml --verbose
    """
    setup_logging(verbose)

    try:
        logger.info(f"Loading configuration from: {config}")
        config_obj = RoundTripConfig.from_yaml(config)
        config_obj.validate()

        results = run_roundtrips(config_obj)

        report_manager = ReportManager(config_obj.output_report_path)
        report_manager.write(results)
        logger.info(f"Report saved to: {config_obj.output_report_path}")

        failed = [result["name"] for result in results if not result["success"]]
        if failed:
            logger.error(f"Round-trip failed for {len(failed)}/{len(results)} algorithms: {failed}")
            sys.exit(1)

        logger.info(f"All {len(results)} flows round-tripped successfully")

    except Exception as e:
        logger.error(f"Script failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
