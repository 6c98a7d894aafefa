"""Filters: data transformations applied before a classifier sees the data"""

from ..base import AlgorithmKind, AlgorithmSpec, OptionSpec, SlotEncoding, SlotSpec

ALL_FILTER = AlgorithmSpec(
    class_id="weka.filters.AllFilter",
    kind=AlgorithmKind.FILTER,
    description="Passes all instances through unchanged.",
)

REPLACE_MISSING_VALUES = AlgorithmSpec(
    class_id="weka.filters.unsupervised.attribute.ReplaceMissingValues",
    kind=AlgorithmKind.FILTER,
    description="Replaces missing values with the modes and means of the training data.",
)

REMOVE_USELESS = AlgorithmSpec(
    class_id="weka.filters.unsupervised.attribute.RemoveUseless",
    kind=AlgorithmKind.FILTER,
    options=(OptionSpec("M", "float", "99.0", "Maximum variance percentage allowed"),),
    description="Removes attributes that do not vary at all or vary too much.",
)

NORMALIZE = AlgorithmSpec(
    class_id="weka.filters.unsupervised.attribute.Normalize",
    kind=AlgorithmKind.FILTER,
    options=(
        OptionSpec("S", "float", "1.0", "Scaling factor of the output range"),
        OptionSpec("T", "float", "0.0", "Translation of the output range"),
    ),
    description="Normalizes all numeric values to [0, 1] (scaled and translated).",
)

DISCRETIZE = AlgorithmSpec(
    class_id="weka.filters.supervised.attribute.Discretize",
    kind=AlgorithmKind.FILTER,
    options=(
        OptionSpec("R", "str", "first-last", "Range of attributes to discretize"),
        OptionSpec("V", "flag", description="Invert the attribute range"),
        OptionSpec("D", "flag", description="Output binary attributes"),
        OptionSpec("Y", "flag", description="Use bin numbers rather than ranges as labels"),
        OptionSpec("E", "flag", description="Use better encoding of split point for MDL"),
        OptionSpec("K", "flag", description="Use Kononenko's MDL criterion"),
        OptionSpec("precision", "int", "6", "Precision for bin boundary labels"),
    ),
    description="Supervised MDL-based discretization of numeric attributes.",
)

MULTI_FILTER = AlgorithmSpec(
    class_id="weka.filters.MultiFilter",
    kind=AlgorithmKind.FILTER,
    slots=(
        SlotSpec(
            "F",
            AlgorithmKind.FILTER,
            SlotEncoding.LIST,
            ("weka.filters.AllFilter",),
            "Filters applied in sequence",
        ),
    ),
    description="Applies several filters in sequence.",
)

FILTERS = (ALL_FILTER, REPLACE_MISSING_VALUES, REMOVE_USELESS, NORMALIZE, DISCRETIZE, MULTI_FILTER)
