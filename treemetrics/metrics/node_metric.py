"""
Node-based metrics for syntactically annotated sentences.

A NodeMetric pairs a weight function with a metric function. Applied to a
node, it sums weight(n) * metric(n) over every node n of the subtree:

    m = NodeMetric("Number of nodes")
    m.set_default_weights(WeightPreset.ALL_ONE)
    m.metric = lambda node: 1
    m.apply(sentence)  # == sentence.get_num_of_nodes()

The method follows E. Bozia, "Measuring Tradition, Imitation, and Simplicity:
The case of Attic Oratory", Proceedings of the Workshop on Corpus-Based
Research in the Humanities (CRH), 2015, pp. 23-29.
"""

import logging
from enum import IntEnum
from typing import Callable, Optional, Union

from ..treebank.elements import UNKNOWN_ID

logger = logging.getLogger(__name__)

NodeFunction = Callable[..., float]


class WeightPreset(IntEnum):
    ALL_ONE = 1
    ROOT_ONE_OTHERS_ZERO = 2
    UNIFORM_SUM_TO_ONE = 3
    LEAVES_ONE_OTHERS_ZERO = 4


def _all_one(node) -> float:
    return 1


def _root_one_others_zero(node) -> float:
    return 1 if node.is_root() else 0


def _uniform_sum_to_one(node) -> float:
    num = node.get_root().get_num_of_nodes()
    if num <= 0:
        return 0.0
    return 1.0 / num


def _leaves_one_others_zero(node) -> float:
    return 1 if node.is_leaf() else 0


_PRESET_WEIGHTS = {
    WeightPreset.ALL_ONE: _all_one,
    WeightPreset.ROOT_ONE_OTHERS_ZERO: _root_one_others_zero,
    WeightPreset.UNIFORM_SUM_TO_ONE: _uniform_sum_to_one,
    WeightPreset.LEAVES_ONE_OTHERS_ZERO: _leaves_one_others_zero,
}


def preset_weight(preset: Union[WeightPreset, int]) -> NodeFunction:
    """Return the weight function of a preset (enum member or integer code)."""
    try:
        return _PRESET_WEIGHTS[WeightPreset(preset)]
    except ValueError:
        raise ValueError(
            f"Unknown weight preset: {preset}. "
            f"Available: {[p.name for p in WeightPreset]}"
        ) from None


def wavelet_weight(n: int, k: int) -> NodeFunction:
    """
    Normalized Haar wavelet weight of order n and shift k.

    With N the number of nodes of the tree and i the compact id of a node,
    t = 2**n * i / N - k. The weight is +1/N for 0 < t <= 0.5, -1/N for
    0.5 < t <= 1 and 0 elsewhere. A negative order gives the scaling
    function (p = 0.5, k = 0). Nodes without a known id weigh 0.
    """
    if n < 0:
        p = 0.5
        k = 0
    else:
        p = 2 ** n
        if not 0 <= k <= p - 1:
            logger.warning(
                f"Wavelet shift k={k} is outside 0..{p - 1} for order n={n}; "
                "all weights will be zero"
            )

    def weight(node) -> float:
        num = node.get_root().get_num_of_nodes()
        if num <= 0:
            return 0.0
        node_id = node.get_id()
        if node_id == UNKNOWN_ID:
            return 0.0

        t = p * node_id / num - k
        if 0 < t <= 0.5:
            return 1 / num
        elif 0.5 < t <= 1:
            return -1 / num
        return 0.0

    return weight


class NodeMetric:
    """
    A weighted metric over the nodes of an annotated sentence.

    weight and metric are plain callables taking a TreebankNode and returning
    a number; replace either one freely. By default every node weighs 1 and
    measures 0.

    Args:
        name: A string that describes the metric.
        weight: Optional weight function.
        metric: Optional metric function.
    """

    def __init__(
        self,
        name: str = "",
        weight: Optional[NodeFunction] = None,
        metric: Optional[NodeFunction] = None,
    ):
        self.name = name
        self.weight = weight or _all_one
        self.metric = metric or (lambda node: 0)

    def set_default_weights(self, preset: Union[WeightPreset, int]) -> "NodeMetric":
        self.weight = preset_weight(preset)
        return self

    def set_wavelet_weights(self, n: int, k: int) -> "NodeMetric":
        self.weight = wavelet_weight(n, k)
        return self

    def apply(self, node) -> float:
        """
        Sum weight(n) * metric(n) over the subtree of node.

        Nodes are visited depth-first in document order. metric is never
        called for a node whose weight is exactly 0.
        """
        total = 0
        stack = [node]
        while stack:
            current = stack.pop()
            value = self.weight(current)
            if value != 0:
                value *= self.metric(current)
            total += value
            stack.extend(reversed(current.get_children()))
        return total

    def __repr__(self) -> str:
        return f"NodeMetric(name={self.name!r})"
