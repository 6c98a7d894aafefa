"""Kernels for support vector machines"""

from ..base import AlgorithmKind, AlgorithmSpec, OptionSpec

POLY_KERNEL = AlgorithmSpec(
    class_id="weka.classifiers.functions.supportVector.PolyKernel",
    kind=AlgorithmKind.KERNEL,
    options=(
        OptionSpec("E", "float", "1.0", "Exponent"),
        OptionSpec("L", "flag", description="Use lower-order terms"),
        OptionSpec("C", "int", "250007", "Size of the cache (prime number), 0 for full cache, -1 to turn it off"),
    ),
    description="Polynomial kernel K(x, y) = <x, y>^p or (<x, y> + 1)^p.",
)

RBF_KERNEL = AlgorithmSpec(
    class_id="weka.classifiers.functions.supportVector.RBFKernel",
    kind=AlgorithmKind.KERNEL,
    options=(
        OptionSpec("G", "float", "0.01", "Gamma"),
        OptionSpec("C", "int", "250007", "Size of the cache (prime number), 0 for full cache, -1 to turn it off"),
    ),
    description="Radial basis function kernel K(x, y) = exp(-gamma * (x - y)^2).",
)

STRING_KERNEL = AlgorithmSpec(
    class_id="weka.classifiers.functions.supportVector.StringKernel",
    kind=AlgorithmKind.KERNEL,
    options=(
        OptionSpec("P", "int", "0", "Pruning method: 0=none, 1=lambda"),
        OptionSpec("C", "int", "250007", "Size of the cache (prime number), 0 for full cache, -1 to turn it off"),
        OptionSpec("IC", "int", "200003", "Size of the internal cache"),
        OptionSpec("L", "float", "0.5", "Lambda"),
        OptionSpec("ssl", "int", "3", "Subsequence length"),
        OptionSpec("ssl-max", "int", "9", "Maximum subsequence length"),
        OptionSpec("N", "flag", description="Normalize the kernel"),
    ),
    description="String subsequence kernel for string attributes.",
)

KERNELS = (POLY_KERNEL, RBF_KERNEL, STRING_KERNEL)
