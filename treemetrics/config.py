import copy
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .metrics.library import get_metric, get_weight
from .metrics.node_metric import NodeMetric
from .rendering.sentence import RenderFlag

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "output": {
        "precision": 2,
    },
    "render": {
        "exclude_punctuation": False,
        "include_synthetic": False,
        "transliterate": False,
    },
    "metrics": [
        {"name": "Number of nodes", "weight": "all_one", "metric": "one"},
        {"name": "Number of leaves", "weight": "leaves_one_others_zero", "metric": "one"},
        {"name": "Height", "weight": "root_one_others_zero", "metric": "height"},
        {"name": "Width", "weight": "root_one_others_zero", "metric": "width"},
        {
            "name": "Mean family size",
            "weight": "uniform_sum_to_one",
            "metric": "num_of_children",
        },
        {"name": "Haar(0,0) depth", "weight": {"wavelet": {"n": 0, "k": 0}}, "metric": "depth"},
    ],
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Return the default configuration, overridden by a YAML file if given.

    Nested sections are merged key by key; the metrics list is replaced as a
    whole.
    """
    if path is None:
        return copy.deepcopy(DEFAULT_CONFIG)

    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    logger.debug(f"Loaded config from {path}")
    return _deep_merge(DEFAULT_CONFIG, data)


def build_metrics(config: Dict[str, Any]) -> List[NodeMetric]:
    """Create the NodeMetric objects described in config["metrics"]."""
    metrics = []
    for i, entry in enumerate(config.get("metrics", [])):
        if not isinstance(entry, dict):
            raise ValueError(f"Metric entry {i} must be a mapping, got {entry!r}")
        name = entry.get("name", f"metric_{i + 1}")
        metrics.append(
            NodeMetric(
                name=name,
                weight=get_weight(entry.get("weight", "all_one")),
                metric=get_metric(str(entry.get("metric", "zero"))),
            )
        )
    return metrics


def render_flags(config: Dict[str, Any]) -> RenderFlag:
    section = config.get("render", {})
    flags = RenderFlag.NONE
    if section.get("exclude_punctuation"):
        flags |= RenderFlag.EXCLUDE_PUNCTUATION
    if section.get("include_synthetic"):
        flags |= RenderFlag.INCLUDE_SYNTHETIC
    if section.get("transliterate"):
        flags |= RenderFlag.TRANSLITERATE
    return flags
