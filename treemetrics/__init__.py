from .treebank import (
    TreebankCollection,
    TreebankDocument,
    TreebankFormatError,
    TreebankNode,
    load_document,
    parse_document,
)
from .metrics import NodeMetric, WeightPreset
from .rendering import RenderFlag, render
from .output import ConsoleSink, MemorySink, OutputSink

__version__ = "0.1.0"

__all__ = [
    "TreebankCollection",
    "TreebankDocument",
    "TreebankFormatError",
    "TreebankNode",
    "load_document",
    "parse_document",
    "NodeMetric",
    "WeightPreset",
    "RenderFlag",
    "render",
    "ConsoleSink",
    "MemorySink",
    "OutputSink",
]
