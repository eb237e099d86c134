from .node_metric import NodeMetric, WeightPreset, preset_weight, wavelet_weight
from .library import available_metrics, get_metric, get_weight

__all__ = [
    "NodeMetric",
    "WeightPreset",
    "preset_weight",
    "wavelet_weight",
    "available_metrics",
    "get_metric",
    "get_weight",
]
