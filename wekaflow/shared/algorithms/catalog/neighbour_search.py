"""Nearest neighbour search structures and the distance functions they use"""

from ..base import AlgorithmKind, AlgorithmSpec, OptionSpec, SlotEncoding, SlotSpec

_DISTANCE_OPTIONS = (
    OptionSpec("D", "flag", description="Do not normalize attribute values"),
    OptionSpec("R", "str", "first-last", "Range of attributes used in the distance"),
    OptionSpec("V", "flag", description="Invert the attribute range"),
)

EUCLIDEAN_DISTANCE = AlgorithmSpec(
    class_id="weka.core.EuclideanDistance",
    kind=AlgorithmKind.DISTANCE,
    options=_DISTANCE_OPTIONS,
    description="Euclidean distance between instances.",
)

MANHATTAN_DISTANCE = AlgorithmSpec(
    class_id="weka.core.ManhattanDistance",
    kind=AlgorithmKind.DISTANCE,
    options=_DISTANCE_OPTIONS,
    description="Manhattan (city block) distance between instances.",
)


def _distance_slot() -> SlotSpec:
    return SlotSpec(
        "A",
        AlgorithmKind.DISTANCE,
        SlotEncoding.QUOTED,
        ("weka.core.EuclideanDistance",),
        "Distance function",
    )


LINEAR_NN_SEARCH = AlgorithmSpec(
    class_id="weka.core.neighboursearch.LinearNNSearch",
    kind=AlgorithmKind.NEIGHBOUR_SEARCH,
    options=(OptionSpec("P", "flag", description="Skip identical instances"),),
    slots=(_distance_slot(),),
    layout=("A", "P"),
    description="Brute force nearest neighbour search.",
)

KD_TREE = AlgorithmSpec(
    class_id="weka.core.neighboursearch.KDTree",
    kind=AlgorithmKind.NEIGHBOUR_SEARCH,
    options=(
        OptionSpec("W", "float", "0.01", "Minimum box relative width"),
        OptionSpec("L", "int", "40", "Maximum number of instances in a leaf"),
        OptionSpec("N", "flag", description="Normalize dimension widths for splitting"),
    ),
    slots=(_distance_slot(),),
    layout=("A", "W", "L", "N"),
    description="KD tree for nearest neighbour search.",
)

COVER_TREE = AlgorithmSpec(
    class_id="weka.core.neighboursearch.CoverTree",
    kind=AlgorithmKind.NEIGHBOUR_SEARCH,
    options=(OptionSpec("B", "float", "1.3", "Base of the expansion constant"),),
    slots=(_distance_slot(),),
    layout=("A", "B"),
    description="Cover tree for nearest neighbour search.",
)

DISTANCES = (EUCLIDEAN_DISTANCE, MANHATTAN_DISTANCE)

NEIGHBOUR_SEARCH = (LINEAR_NN_SEARCH, KD_TREE, COVER_TREE)
