"""
Named weight and metric functions, used to build metrics from configuration.

Metric names are either plain ("height") or take a parameter after a colon
("relation:SBJ", "pos:v", "lemma:λέγω").
"""

from typing import Any, Callable, Dict, Mapping, Union

from .node_metric import NodeFunction, WeightPreset, preset_weight, wavelet_weight


_METRICS: Dict[str, NodeFunction] = {
    "zero": lambda node: 0,
    "one": lambda node: 1,
    "height": lambda node: node.get_height(),
    "width": lambda node: node.get_width(),
    "max_family_width": lambda node: node.get_max_family_width(),
    "num_of_children": lambda node: node.get_num_of_children(),
    "num_of_nodes": lambda node: node.get_num_of_nodes(),
    "num_of_words": lambda node: node.get_num_of_words(),
    "is_leaf": lambda node: 1 if node.is_leaf() else 0,
    "is_synthetic": lambda node: 1 if node.is_synthetic() else 0,
    "depth": lambda node: node.get_depth(),
    "form_length": lambda node: len(node.get_form()),
}


def _relation_is(relation: str) -> NodeFunction:
    return lambda node: 1 if node.get_relation() == relation else 0


def _pos_starts_with(prefix: str) -> NodeFunction:
    return lambda node: 1 if node.get_pos_tag().startswith(prefix) else 0


def _lemma_is(lemma: str) -> NodeFunction:
    return lambda node: 1 if node.get_lemma() == lemma else 0


_PARAMETRIZED_METRICS: Dict[str, Callable[[str], NodeFunction]] = {
    "relation": _relation_is,
    "pos": _pos_starts_with,
    "lemma": _lemma_is,
}


def available_metrics() -> list:
    return sorted(_METRICS) + [f"{name}:<value>" for name in sorted(_PARAMETRIZED_METRICS)]


def get_metric(key: str) -> NodeFunction:
    """Look up a metric function by name, e.g. 'height' or 'relation:OBJ'."""
    name, sep, argument = key.partition(":")
    name = name.strip().lower()

    if sep:
        factory = _PARAMETRIZED_METRICS.get(name)
        if factory is None or not argument:
            raise ValueError(
                f"Unknown metric: {key}. Available: {available_metrics()}"
            )
        return factory(argument)

    metric = _METRICS.get(name)
    if metric is None:
        raise ValueError(f"Unknown metric: {key}. Available: {available_metrics()}")
    return metric


def get_weight(key: Union[str, int, Mapping[str, Any]]) -> NodeFunction:
    """
    Look up a weight function.

    Accepts a preset name ("uniform_sum_to_one"), a preset code (1-4) or a
    wavelet mapping {"wavelet": {"n": 2, "k": 1}}.
    """
    if isinstance(key, Mapping):
        params = key.get("wavelet")
        if not isinstance(params, Mapping):
            raise ValueError(f"Unknown weight: {dict(key)}")
        return wavelet_weight(int(params.get("n", 0)), int(params.get("k", 0)))

    if isinstance(key, int):
        return preset_weight(key)

    try:
        return preset_weight(WeightPreset[str(key).strip().upper()])
    except KeyError:
        raise ValueError(
            f"Unknown weight: {key}. "
            f"Available: {[p.name.lower() for p in WeightPreset]} or wavelet"
        ) from None
