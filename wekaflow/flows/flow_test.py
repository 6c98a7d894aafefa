import pytest

from wekaflow.flows import Flow, FlowComponent, FlowParameter, serialize_classifier
from wekaflow.shared.algorithms import AlgorithmRegistry


def _leaf(name: str) -> Flow:
    return Flow(
        name=name,
        class_name=name,
        external_version="Weka_3.9.6_00000000",
        parameters=[FlowParameter(name="G", data_type="option", default_value="0.01")],
    )


class TestFlow:
    def test_parameter_lookup(self):
        flow = _leaf("Kernel")
        assert flow.get_parameter("G").default_value == "0.01"
        assert flow.get_parameter("C") is None
        assert list(flow.parameters_as_dict()) == ["G"]

    def test_iter_components_paths(self):
        inner = Flow(
            name="SMO(Kernel)",
            class_name="SMO",
            external_version="v",
            components=[FlowComponent(identifier="K", flow=_leaf("Kernel"))],
        )
        outer = Flow(
            name="Bagging(SMO(Kernel))",
            class_name="Bagging",
            external_version="v",
            components=[FlowComponent(identifier="W", flow=inner)],
        )
        assert [(path, flow.class_name) for path, flow in outer.iter_components()] == [
            ("", "Bagging"),
            ("W", "SMO"),
            ("W/K", "Kernel"),
        ]
        assert outer.get_component("W") is inner
        assert outer.get_component("K") is None

    def test_with_name_leaves_original(self):
        flow = _leaf("Kernel")
        renamed = flow.with_name("Kernel_1234")
        assert renamed.name == "Kernel_1234"
        assert flow.name == "Kernel"
        assert renamed.parameters == flow.parameters

    def test_flow_id_only_written_when_set(self):
        flow = _leaf("Kernel")
        assert "flow_id" not in flow.to_dict()
        flow.flow_id = 7
        assert list(flow.to_dict())[0] == "flow_id"

    def test_yaml_round_trip(self):
        flow = serialize_classifier(AlgorithmRegistry.instantiate("Bagging"), ["OpenmlWeka", "weka"])
        text = flow.to_yaml()
        assert Flow.from_yaml(text) == flow
        assert Flow.from_yaml(text).to_yaml() == text

    def test_yaml_keeps_long_values_on_one_line(self):
        flow = serialize_classifier(AlgorithmRegistry.instantiate("IBk"))
        text = flow.to_yaml()
        assert "LinearNNSearch -A \\\"weka.core.EuclideanDistance -R first-last\\\"" in text

    def test_from_yaml_rejects_non_mapping(self):
        with pytest.raises(ValueError):
            Flow.from_yaml("- just\n- a list\n")
