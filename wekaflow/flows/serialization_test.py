import dataclasses
import re
import uuid

import pytest

from wekaflow.flows import (
    Flow,
    FlowName,
    MalformedParameterEncoding,
    count_flow_components,
    deserialize_classifier,
    parameter_values_from_json,
    parameter_values_to_json,
    serialize_classifier,
)
from wekaflow.flows.store import InMemoryFlowStore
from wekaflow.shared.algorithms import AlgorithmInstance, AlgorithmKind, AlgorithmRegistry, UnknownAlgorithmClass
from wekaflow.shared.algorithms.options import join_options

J48 = "weka.classifiers.trees.J48"
BAGGING = "weka.classifiers.meta.Bagging"
ADA_BOOST = "weka.classifiers.meta.AdaBoostM1"
FILTERED_CLASSIFIER = "weka.classifiers.meta.FilteredClassifier"
SMO = "weka.classifiers.functions.SMO"
LOGISTIC = "weka.classifiers.functions.Logistic"
POLY_KERNEL = "weka.classifiers.functions.supportVector.PolyKernel"
RBF_KERNEL = "weka.classifiers.functions.supportVector.RBFKernel"
STRING_KERNEL = "weka.classifiers.functions.supportVector.StringKernel"
MULTILAYER_PERCEPTRON = "weka.classifiers.functions.MultilayerPerceptron"
MULTI_FILTER = "weka.filters.MultiFilter"
TAGS = ["OpenmlWeka", "weka"]

CLASSIFIERS = sorted(AlgorithmRegistry.get_available_algorithms(AlgorithmKind.CLASSIFIER))
ENSEMBLES = [BAGGING, ADA_BOOST]
TREES = [J48, "weka.classifiers.trees.REPTree", "weka.classifiers.trees.RandomTree"]


def roundtrip(instance: AlgorithmInstance) -> AlgorithmInstance:
    """Upload the instance's flow under a unique name, download it and reconstruct the instance"""
    store = InMemoryFlowStore()
    uploaded = serialize_classifier(instance, TAGS)
    sentinel = "_" + uuid.uuid4().hex
    flow_id = store.upload(uploaded.with_name(uploaded.name + sentinel))

    downloaded = store.get(flow_id)
    assert downloaded.name.endswith(sentinel)
    downloaded = downloaded.with_name(downloaded.name[: -len(sentinel)])
    assert set(downloaded.parameters_as_dict()) == set(uploaded.parameters_as_dict())

    retrieved = deserialize_classifier(downloaded)
    assert retrieved.get_options() == instance.get_options()
    assert serialize_classifier(retrieved, TAGS).to_yaml() == uploaded.to_yaml()
    return retrieved


def wrap(instance: AlgorithmInstance, ensemble: str) -> AlgorithmInstance:
    wrapper = AlgorithmRegistry.instantiate(ensemble)
    wrapper.set_slot("W", instance)
    return wrapper


def with_default(flow: Flow, parameter_name: str, value: str) -> Flow:
    parameters = [
        dataclasses.replace(parameter, default_value=value) if parameter.name == parameter_name else parameter
        for parameter in flow.parameters
    ]
    return dataclasses.replace(flow, parameters=parameters)


class TestParameterValuesJson:
    def test_encode(self):
        assert parameter_values_to_json(["weka.filters.AllFilter "]) == '["weka.filters.AllFilter "]'

    def test_escapes_quotes(self):
        value = 'weka.core.neighboursearch.LinearNNSearch -A "weka.core.EuclideanDistance -R first-last"'
        assert parameter_values_from_json(parameter_values_to_json([value])) == [value]

    @pytest.mark.parametrize("encoded", ["", "[", '"J48"', "[1, 2]", '{"W": "J48"}'])
    def test_malformed(self, encoded):
        with pytest.raises(MalformedParameterEncoding):
            parameter_values_from_json(encoded)


class TestSimpleFlows:
    @pytest.mark.parametrize("class_id", CLASSIFIERS)
    def test_default_instance_roundtrip(self, class_id):
        roundtrip(AlgorithmRegistry.instantiate(class_id))

    @pytest.mark.parametrize("class_id", [J48, "weka.classifiers.trees.REPTree", "weka.classifiers.rules.ZeroR"])
    def test_plain_name_is_class_id(self, class_id):
        flow = serialize_classifier(AlgorithmRegistry.instantiate(class_id))
        assert flow.name == class_id
        assert flow.class_name == class_id
        assert flow.components == []

    def test_parameters_follow_option_schema(self):
        flow = serialize_classifier(AlgorithmRegistry.create(J48, ["-U", "-C", "0.1"]))
        assert [parameter.name for parameter in flow.parameters] == ["U", "O", "C", "M", "R", "A", "J"]
        parameters = flow.parameters_as_dict()
        assert (parameters["U"].data_type, parameters["U"].default_value) == ("flag", "true")
        assert (parameters["O"].data_type, parameters["O"].default_value) == ("flag", "false")
        assert (parameters["C"].data_type, parameters["C"].default_value) == ("option", "0.1")
        assert parameters["M"].default_value == "2"

    def test_flow_metadata(self):
        flow = serialize_classifier(AlgorithmRegistry.instantiate(J48), TAGS)
        assert re.fullmatch(r"Weka_3\.9\.6_[0-9a-f]{8}", flow.external_version)
        assert flow.dependencies == "Weka_3.9.6"
        assert flow.language == "English"
        assert flow.tags == TAGS
        assert flow.flow_id is None

    def test_external_version_depends_on_class_only(self):
        default = serialize_classifier(AlgorithmRegistry.instantiate(J48))
        configured = serialize_classifier(AlgorithmRegistry.create(J48, ["-C", "0.3"]))
        other = serialize_classifier(AlgorithmRegistry.instantiate("weka.classifiers.trees.REPTree"))
        assert default.external_version == configured.external_version
        assert default.external_version != other.external_version

    def test_configured_values_roundtrip(self):
        retrieved = roundtrip(AlgorithmRegistry.create(J48, ["-U", "-C", "0.03", "-M", "10", "-A"]))
        assert retrieved.get_option("U") is True
        assert retrieved.get_option("C") == "0.03"

    def test_serialization_is_deterministic_and_pure(self):
        instance = AlgorithmRegistry.instantiate(FILTERED_CLASSIFIER)
        options = instance.get_options()
        assert serialize_classifier(instance).to_yaml() == serialize_classifier(instance).to_yaml()
        assert instance.get_options() == options


class TestCompositeFlows:
    def test_wrapped_classifier_default(self):
        child = AlgorithmRegistry.create(J48, ["-C", "0.1", "-M", "3"])
        bagging = wrap(child, BAGGING)
        flow = serialize_classifier(bagging)
        assert flow.name == f"{BAGGING}({J48})"
        assert flow.get_parameter("W").default_value == parameter_values_to_json(
            [J48 + " " + join_options(child.get_options())]
        )
        assert flow.get_parameter("W").data_type == "classifier"
        assert [component.identifier for component in flow.components] == ["W"]
        assert flow.get_component("W") == serialize_classifier(child)
        roundtrip(bagging)

    @pytest.mark.parametrize("kernel", [POLY_KERNEL, RBF_KERNEL, STRING_KERNEL])
    def test_kernel(self, kernel):
        configured = AlgorithmRegistry.instantiate(kernel)
        configured.set_option("C", 0)
        svm = AlgorithmRegistry.instantiate(SMO)
        svm.set_slot("K", configured)
        flow = serialize_classifier(svm)
        assert flow.name == f"{SMO}({kernel},{LOGISTIC})"
        assert kernel in flow.get_parameter("K").default_value
        assert flow.get_parameter("K").data_type == "kernel"
        assert [component.identifier for component in flow.components] == ["K", "calibrator"]
        retrieved = roundtrip(svm).get_slot("K")
        assert retrieved.class_id == kernel
        assert retrieved.get_option("C") == "0"

    def test_kernel_options_from_tokens(self):
        svm = AlgorithmRegistry.create(SMO, ["-K", f"{RBF_KERNEL} -G 0.32 -C 250007"])
        assert roundtrip(svm).get_slot("K").get_option("G") == "0.32"

    def test_tags_reach_components(self):
        flow = serialize_classifier(AlgorithmRegistry.instantiate(SMO), TAGS)
        assert all(sub_flow.tags == TAGS for _, sub_flow in flow.iter_components())

    @pytest.mark.parametrize(
        "search",
        [
            "weka.core.neighboursearch.LinearNNSearch",
            "weka.core.neighboursearch.KDTree",
            "weka.core.neighboursearch.CoverTree",
        ],
    )
    def test_nearest_neighbour_search(self, search):
        knn = AlgorithmRegistry.create("IBk", ["-K", "3", "-A", f"{search} -A \"weka.core.ManhattanDistance -R first-last\""])
        flow = serialize_classifier(knn)
        assert flow.name == f"weka.classifiers.lazy.IBk({search}(weka.core.ManhattanDistance))"
        assert count_flow_components(flow) == 3
        assert flow.get_parameter("A").data_type == "neighbour_search"
        roundtrip(knn)

    def test_list_valued_container(self):
        multi = AlgorithmRegistry.create(
            MULTI_FILTER,
            [
                "-F",
                "weka.filters.unsupervised.attribute.ReplaceMissingValues ",
                "-F",
                "weka.filters.unsupervised.attribute.RemoveUseless -M 95.0",
                "-F",
                "weka.filters.unsupervised.attribute.Normalize -S 1.0 -T 0.0",
            ],
        )
        flow = serialize_classifier(multi)
        assert flow.get_parameter("F").data_type == "list"
        assert len(parameter_values_from_json(flow.get_parameter("F").default_value)) == 3
        assert [component.identifier for component in flow.components] == ["F1", "F2", "F3"]

        classifier = AlgorithmRegistry.instantiate(FILTERED_CLASSIFIER)
        classifier.set_slot("F", multi)
        flow = serialize_classifier(classifier)
        assert flow.name.startswith(f"{FILTERED_CLASSIFIER}({MULTI_FILTER}(")
        assert flow.name.endswith(f"),{J48})")
        assert count_flow_components(flow) == 6
        roundtrip(classifier)


class TestMultiLevel:
    @pytest.mark.parametrize("ensemble", ENSEMBLES)
    @pytest.mark.parametrize("tree", TREES)
    def test_plain_chain(self, tree, ensemble):
        instance = AlgorithmRegistry.instantiate(tree)
        for level in range(6):
            flow = serialize_classifier(instance)
            assert count_flow_components(flow) == level + 1
            assert FlowName.parse(flow.name).depth == level
            assert instance.get_options().count("--") == level
            if level > 0:
                assert flow.get_parameter("W").default_value.count("--") == level - 1
            roundtrip(instance)
            instance = wrap(instance, ensemble)

    def test_alternating_ensembles(self):
        instance = AlgorithmRegistry.instantiate(J48)
        for level in range(5):
            instance = wrap(instance, ENSEMBLES[level % 2])
        flow = serialize_classifier(instance)
        assert flow.name == f"{BAGGING}({ADA_BOOST}({BAGGING}({ADA_BOOST}({BAGGING}({J48})))))"
        roundtrip(instance)

    def test_filtered_classifier_chain(self):
        instance = AlgorithmRegistry.instantiate(FILTERED_CLASSIFIER)
        for level in range(1, 4):
            assert count_flow_components(serialize_classifier(instance)) == level + 2
            roundtrip(instance)
            instance = wrap(instance, BAGGING)

    @pytest.mark.parametrize("levels", [1, 2])
    def test_separator_as_option_value(self, levels):
        perceptron = AlgorithmRegistry.instantiate(MULTILAYER_PERCEPTRON)
        perceptron.set_option("H", "--")
        instance = perceptron
        for level in range(levels):
            instance = wrap(instance, ENSEMBLES[level % 2])
        assert instance.get_options()[-2:] == ["-H", "--"]

        retrieved = roundtrip(instance)
        for _ in range(levels):
            retrieved = retrieved.get_slot("W")
        assert retrieved.class_id == MULTILAYER_PERCEPTRON
        assert retrieved.get_option("H") == "--"

    def test_multi_child_chain(self):
        instance = AlgorithmRegistry.instantiate(SMO)
        for level in range(3):
            assert count_flow_components(serialize_classifier(instance)) == level + 3
            roundtrip(instance)
            instance = wrap(instance, ADA_BOOST)

    def test_boosted_tree(self):
        once = wrap(AlgorithmRegistry.instantiate(J48), ADA_BOOST)
        flow = serialize_classifier(once)
        assert flow.name == f"{ADA_BOOST}({J48})"
        assert count_flow_components(flow) == 2
        assert once.get_options().count("--") == 1

        twice = wrap(once, ADA_BOOST)
        flow = serialize_classifier(twice)
        assert flow.name == f"{ADA_BOOST}({ADA_BOOST}({J48}))"
        assert count_flow_components(flow) == 3
        assert twice.get_options().count("--") == 2
        assert flow.get_parameter("W").default_value.count("--") == 1


class TestDeserializeErrors:
    def test_malformed_composite_json(self):
        flow = with_default(serialize_classifier(AlgorithmRegistry.instantiate(BAGGING)), "W", "[weka.classifiers.trees.REPTree")
        with pytest.raises(MalformedParameterEncoding):
            deserialize_classifier(flow)

    def test_composite_without_class(self):
        flow = with_default(serialize_classifier(AlgorithmRegistry.instantiate(BAGGING)), "W", '["-M 2"]')
        with pytest.raises(MalformedParameterEncoding):
            deserialize_classifier(flow)

    def test_empty_composite(self):
        flow = with_default(serialize_classifier(AlgorithmRegistry.instantiate(BAGGING)), "W", "[]")
        with pytest.raises(MalformedParameterEncoding):
            deserialize_classifier(flow)

    def test_two_algorithms_in_single_slot(self):
        flow = serialize_classifier(AlgorithmRegistry.instantiate(BAGGING))
        flow = with_default(flow, "W", parameter_values_to_json([f"{J48} ", f"{J48} "]))
        with pytest.raises(MalformedParameterEncoding):
            deserialize_classifier(flow)

    def test_unknown_class_in_name(self):
        flow = serialize_classifier(AlgorithmRegistry.instantiate(BAGGING))
        flow = flow.with_name(f"{BAGGING}(weka.classifiers.trees.M5P)")
        with pytest.raises(UnknownAlgorithmClass):
            deserialize_classifier(flow)

    def test_unknown_class_in_parameter(self):
        flow = serialize_classifier(AlgorithmRegistry.instantiate(BAGGING))
        flow = with_default(flow, "W", parameter_values_to_json(["weka.classifiers.trees.M5P -M 4"]))
        with pytest.raises(UnknownAlgorithmClass):
            deserialize_classifier(flow)

    def test_name_contradicts_parameters(self):
        flow = serialize_classifier(wrap(AlgorithmRegistry.instantiate(J48), BAGGING))
        flow = with_default(flow, "W", parameter_values_to_json(["weka.classifiers.trees.REPTree -M 2"]))
        with pytest.raises(MalformedParameterEncoding):
            deserialize_classifier(flow)

    def test_class_name_contradicts_name(self):
        flow = dataclasses.replace(serialize_classifier(AlgorithmRegistry.instantiate(J48)), class_name=BAGGING)
        with pytest.raises(MalformedParameterEncoding):
            deserialize_classifier(flow)

    def test_unknown_parameter(self):
        flow = serialize_classifier(AlgorithmRegistry.instantiate(J48))
        flow = dataclasses.replace(flow, parameters=flow.parameters + [dataclasses.replace(flow.parameters[0], name="Z")])
        with pytest.raises(MalformedParameterEncoding):
            deserialize_classifier(flow)

    def test_bad_flag_value(self):
        flow = with_default(serialize_classifier(AlgorithmRegistry.instantiate(J48)), "U", "yes")
        with pytest.raises(MalformedParameterEncoding):
            deserialize_classifier(flow)

    def test_bad_option_value(self):
        flow = with_default(serialize_classifier(AlgorithmRegistry.instantiate(J48)), "M", "many")
        with pytest.raises(MalformedParameterEncoding):
            deserialize_classifier(flow)

    def test_missing_parameter_keeps_default(self):
        flow = serialize_classifier(AlgorithmRegistry.create(J48, ["-C", "0.1"]))
        flow = dataclasses.replace(flow, parameters=[p for p in flow.parameters if p.name != "C"])
        assert deserialize_classifier(flow).get_option("C") == "0.25"
