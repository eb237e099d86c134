from .elements import UNKNOWN_ID
from .node import TreebankNode
from .document import TreebankDocument, select_parse
from .loader import TreebankFormatError, load_document, parse_document
from .collection import TreebankCollection
from . import statistics

__all__ = [
    "UNKNOWN_ID",
    "TreebankNode",
    "TreebankDocument",
    "TreebankCollection",
    "TreebankFormatError",
    "load_document",
    "parse_document",
    "select_parse",
    "statistics",
]
