"""Base classifiers: algorithms that learn a model directly from data"""

from ..base import AlgorithmKind, AlgorithmSpec, OptionSpec, SlotEncoding, SlotSpec

ZERO_R = AlgorithmSpec(
    class_id="weka.classifiers.rules.ZeroR",
    kind=AlgorithmKind.CLASSIFIER,
    description="Predicts the majority class (nominal) or the mean (numeric).",
)

ONE_R = AlgorithmSpec(
    class_id="weka.classifiers.rules.OneR",
    kind=AlgorithmKind.CLASSIFIER,
    options=(OptionSpec("B", "int", "6", "Minimum bucket size used for discretizing numeric attributes"),),
    description="1R classifier: one rule based on the single most predictive attribute.",
)

JRIP = AlgorithmSpec(
    class_id="weka.classifiers.rules.JRip",
    kind=AlgorithmKind.CLASSIFIER,
    options=(
        OptionSpec("F", "int", "3", "Number of folds for reduced error pruning"),
        OptionSpec("N", "float", "2.0", "Minimal weights of instances within a split"),
        OptionSpec("O", "int", "2", "Number of optimization runs"),
        OptionSpec("S", "int", "1", "Random seed"),
        OptionSpec("E", "flag", description="Do not check the error rate >= 0.5 in stopping criteria"),
        OptionSpec("P", "flag", description="Do not use pruning"),
    ),
    description="Repeated Incremental Pruning to Produce Error Reduction (RIPPER).",
)

J48 = AlgorithmSpec(
    class_id="weka.classifiers.trees.J48",
    kind=AlgorithmKind.CLASSIFIER,
    options=(
        OptionSpec("U", "flag", description="Use unpruned tree"),
        OptionSpec("O", "flag", description="Do not collapse tree"),
        OptionSpec("C", "float", "0.25", "Confidence threshold for pruning"),
        OptionSpec("M", "int", "2", "Minimum number of instances per leaf"),
        OptionSpec("R", "flag", description="Use reduced error pruning"),
        OptionSpec("A", "flag", description="Laplace smoothing for predicted probabilities"),
        OptionSpec("J", "flag", description="Do not use MDL correction for info gain on numeric attributes"),
    ),
    description="C4.5 decision tree.",
)

REP_TREE = AlgorithmSpec(
    class_id="weka.classifiers.trees.REPTree",
    kind=AlgorithmKind.CLASSIFIER,
    options=(
        OptionSpec("M", "int", "2", "Minimum total weight of instances in a leaf"),
        OptionSpec("V", "float", "0.001", "Minimum proportion of variance for a split"),
        OptionSpec("N", "int", "3", "Number of folds for reduced error pruning"),
        OptionSpec("S", "int", "1", "Seed for random data shuffling"),
        OptionSpec("P", "flag", description="No pruning"),
        OptionSpec("L", "int", "-1", "Maximum tree depth (-1 for no restriction)"),
        OptionSpec("I", "float", "0.0", "Initial class value count"),
    ),
    description="Fast decision tree learner using reduced-error pruning.",
)

HOEFFDING_TREE = AlgorithmSpec(
    class_id="weka.classifiers.trees.HoeffdingTree",
    kind=AlgorithmKind.CLASSIFIER,
    options=(
        OptionSpec("L", "int", "2", "Leaf prediction strategy"),
        OptionSpec("S", "int", "1", "Split criterion"),
        OptionSpec("E", "float", "1.0E-7", "Allowable error in a split decision"),
        OptionSpec("H", "float", "0.05", "Threshold below which a split is forced to break ties"),
        OptionSpec("M", "float", "0.01", "Minimum fraction of weight required down at least two branches"),
        OptionSpec("G", "float", "200.0", "Grace period"),
        OptionSpec("N", "float", "0.0", "Naive Bayes prediction threshold"),
    ),
    description="Incremental decision tree for data streams (VFDT).",
)

LMT = AlgorithmSpec(
    class_id="weka.classifiers.trees.LMT",
    kind=AlgorithmKind.CLASSIFIER,
    options=(
        OptionSpec("B", "flag", description="Binary splits"),
        OptionSpec("R", "flag", description="Split on residuals instead of class values"),
        OptionSpec("C", "flag", description="Use cross-validation for boosting at all nodes"),
        OptionSpec("P", "flag", description="Use error on probabilities instead of misclassification error"),
        OptionSpec("I", "int", "-1", "Fixed number of LogitBoost iterations"),
        OptionSpec("M", "int", "15", "Minimum number of instances at which a node can be split"),
        OptionSpec("W", "float", "0.0", "Beta for weight trimming in LogitBoost"),
        OptionSpec("A", "flag", description="Use AIC to choose the number of iterations"),
    ),
    description="Logistic model trees.",
)

DECISION_STUMP = AlgorithmSpec(
    class_id="weka.classifiers.trees.DecisionStump",
    kind=AlgorithmKind.CLASSIFIER,
    description="One-level decision tree, usually used as a boosting base learner.",
)

RANDOM_TREE = AlgorithmSpec(
    class_id="weka.classifiers.trees.RandomTree",
    kind=AlgorithmKind.CLASSIFIER,
    options=(
        OptionSpec("K", "int", "0", "Number of randomly chosen attributes (0 for log2(#predictors)+1)"),
        OptionSpec("M", "float", "1.0", "Minimum total weight of instances in a leaf"),
        OptionSpec("V", "float", "0.001", "Minimum proportion of variance for a split"),
        OptionSpec("S", "int", "1", "Random seed"),
    ),
    description="Tree that considers K randomly chosen attributes at each node.",
)

RANDOM_FOREST = AlgorithmSpec(
    class_id="weka.classifiers.trees.RandomForest",
    kind=AlgorithmKind.CLASSIFIER,
    options=(
        OptionSpec("P", "int", "100", "Size of each bag, as a percentage of the training set size"),
        OptionSpec("O", "flag", description="Calculate the out of bag error"),
        OptionSpec("I", "int", "100", "Number of iterations"),
        OptionSpec("num-slots", "int", "1", "Number of execution slots"),
        OptionSpec("K", "int", "0", "Number of randomly chosen attributes"),
        OptionSpec("M", "float", "1.0", "Minimum total weight of instances in a leaf"),
        OptionSpec("V", "float", "0.001", "Minimum proportion of variance for a split"),
        OptionSpec("S", "int", "1", "Random seed"),
    ),
    description="Forest of random trees.",
)

NAIVE_BAYES = AlgorithmSpec(
    class_id="weka.classifiers.bayes.NaiveBayes",
    kind=AlgorithmKind.CLASSIFIER,
    options=(
        OptionSpec("K", "flag", description="Use kernel density estimator for numeric attributes"),
        OptionSpec("D", "flag", description="Use supervised discretization for numeric attributes"),
        OptionSpec("O", "flag", description="Display model in old format"),
    ),
    description="Naive Bayes classifier using estimator classes.",
)

LOGISTIC = AlgorithmSpec(
    class_id="weka.classifiers.functions.Logistic",
    kind=AlgorithmKind.CLASSIFIER,
    options=(
        OptionSpec("R", "float", "1.0E-8", "Ridge in the log-likelihood"),
        OptionSpec("M", "int", "-1", "Maximum number of iterations (-1 until convergence)"),
        OptionSpec("num-decimal-places", "int", "4", "Number of decimal places in the model output"),
    ),
    description="Multinomial logistic regression with a ridge estimator.",
)

MULTILAYER_PERCEPTRON = AlgorithmSpec(
    class_id="weka.classifiers.functions.MultilayerPerceptron",
    kind=AlgorithmKind.CLASSIFIER,
    options=(
        OptionSpec("L", "float", "0.3", "Learning rate"),
        OptionSpec("M", "float", "0.2", "Momentum"),
        OptionSpec("N", "int", "500", "Number of epochs"),
        OptionSpec("V", "int", "0", "Validation set size as a percentage"),
        OptionSpec("S", "int", "0", "Random seed"),
        OptionSpec("E", "int", "20", "Validation threshold"),
        OptionSpec("H", "str", "a", "Hidden layers (comma separated sizes or wildcards)"),
        OptionSpec("B", "flag", description="Do not use a nominal to binary filter"),
        OptionSpec("C", "flag", description="Do not normalize a numeric class"),
        OptionSpec("I", "flag", description="Do not normalize attributes"),
        OptionSpec("R", "flag", description="Do not reset the network on divergence"),
        OptionSpec("D", "flag", description="Decay the learning rate"),
    ),
    description="Neural network trained with backpropagation.",
)

IBK = AlgorithmSpec(
    class_id="weka.classifiers.lazy.IBk",
    kind=AlgorithmKind.CLASSIFIER,
    options=(
        OptionSpec("I", "flag", description="Weight neighbours by the inverse of their distance"),
        OptionSpec("F", "flag", description="Weight neighbours by 1 - their distance"),
        OptionSpec("K", "int", "1", "Number of nearest neighbours"),
        OptionSpec("E", "flag", description="Minimise mean squared error rather than mean absolute error"),
        OptionSpec("W", "int", "0", "Maximum number of training instances kept (0 for no limit)"),
        OptionSpec("X", "flag", description="Select the number of neighbours by cross-validation"),
    ),
    slots=(
        SlotSpec(
            "A",
            AlgorithmKind.NEIGHBOUR_SEARCH,
            SlotEncoding.QUOTED,
            ("weka.core.neighboursearch.LinearNNSearch",),
            "Nearest neighbour search algorithm",
        ),
    ),
    description="K-nearest neighbours classifier.",
)

SMO = AlgorithmSpec(
    class_id="weka.classifiers.functions.SMO",
    kind=AlgorithmKind.CLASSIFIER,
    options=(
        OptionSpec("C", "float", "1.0", "Complexity constant"),
        OptionSpec("L", "float", "0.001", "Tolerance parameter"),
        OptionSpec("P", "float", "1.0E-12", "Epsilon for round-off error"),
        OptionSpec("N", "int", "0", "Data transformation: 0=normalize, 1=standardize, 2=neither"),
        OptionSpec("M", "flag", description="Fit calibration models to SVM outputs"),
        OptionSpec("V", "int", "-1", "Number of cross-validation folds for the calibration models"),
        OptionSpec("W", "int", "1", "Random seed for the cross-validation"),
    ),
    slots=(
        SlotSpec(
            "K",
            AlgorithmKind.KERNEL,
            SlotEncoding.QUOTED,
            ("weka.classifiers.functions.supportVector.PolyKernel",),
            "Kernel to use",
        ),
        SlotSpec(
            "calibrator",
            AlgorithmKind.CLASSIFIER,
            SlotEncoding.QUOTED,
            ("weka.classifiers.functions.Logistic",),
            "Calibration method",
        ),
    ),
    description="Support vector machine trained with sequential minimal optimization.",
)

CLASSIFIERS = (
    ZERO_R,
    ONE_R,
    JRIP,
    J48,
    REP_TREE,
    HOEFFDING_TREE,
    LMT,
    DECISION_STUMP,
    RANDOM_TREE,
    RANDOM_FOREST,
    NAIVE_BAYES,
    LOGISTIC,
    MULTILAYER_PERCEPTRON,
    IBK,
    SMO,
)
