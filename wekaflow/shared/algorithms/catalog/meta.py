"""Meta classifiers: classifiers built around other algorithms"""

from ..base import AlgorithmKind, AlgorithmSpec, OptionSpec, SlotEncoding, SlotSpec

BAGGING = AlgorithmSpec(
    class_id="weka.classifiers.meta.Bagging",
    kind=AlgorithmKind.CLASSIFIER,
    options=(
        OptionSpec("P", "int", "100", "Size of each bag, as a percentage of the training set size"),
        OptionSpec("O", "flag", description="Calculate the out of bag error"),
        OptionSpec("S", "int", "1", "Random seed"),
        OptionSpec("num-slots", "int", "1", "Number of execution slots"),
        OptionSpec("I", "int", "10", "Number of iterations"),
    ),
    slots=(
        SlotSpec(
            "W",
            AlgorithmKind.CLASSIFIER,
            SlotEncoding.WRAPPED,
            ("weka.classifiers.trees.REPTree",),
            "Base classifier",
        ),
    ),
    description="Bootstrap aggregating of a base classifier.",
)

ADA_BOOST_M1 = AlgorithmSpec(
    class_id="weka.classifiers.meta.AdaBoostM1",
    kind=AlgorithmKind.CLASSIFIER,
    options=(
        OptionSpec("P", "int", "100", "Percentage of weight mass to base training on"),
        OptionSpec("Q", "flag", description="Use resampling instead of reweighting"),
        OptionSpec("S", "int", "1", "Random seed"),
        OptionSpec("I", "int", "10", "Number of iterations"),
    ),
    slots=(
        SlotSpec(
            "W",
            AlgorithmKind.CLASSIFIER,
            SlotEncoding.WRAPPED,
            ("weka.classifiers.trees.DecisionStump",),
            "Base classifier",
        ),
    ),
    description="Boosting of a nominal class classifier using the AdaBoost M1 method.",
)

FILTERED_CLASSIFIER = AlgorithmSpec(
    class_id="weka.classifiers.meta.FilteredClassifier",
    kind=AlgorithmKind.CLASSIFIER,
    options=(OptionSpec("S", "int", "1", "Random seed"),),
    slots=(
        SlotSpec(
            "F",
            AlgorithmKind.FILTER,
            SlotEncoding.QUOTED,
            ("weka.filters.supervised.attribute.Discretize",),
            "Filter applied to the data before training",
        ),
        SlotSpec(
            "W",
            AlgorithmKind.CLASSIFIER,
            SlotEncoding.WRAPPED,
            ("weka.classifiers.trees.J48",),
            "Classifier trained on the filtered data",
        ),
    ),
    layout=("F", "S", "W"),
    description="Runs a classifier on data that has been passed through a filter.",
)

META_CLASSIFIERS = (BAGGING, ADA_BOOST_M1, FILTERED_CLASSIFIER)
