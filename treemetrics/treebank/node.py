import logging
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional, Sequence, Union

from .elements import (
    UNKNOWN_ID,
    WORD_TAG,
    element_children,
    is_synthetic_element,
    iter_tree,
    parse_raw_id,
)
from . import statistics

logger = logging.getLogger(__name__)


class TreebankNode:
    """
    One node of a syntactically annotated sentence.

    Every node is also the root of its own subtree, so a sentence is simply the
    node built on the canonical parse element of a <sentence>. Nodes are light
    views over the underlying XML element: get_children() builds new views on
    every call, and two views of the same element in the same tree compare
    equal. The only state kept is write-once:

      - the compact id map, stored on the root node the first time any node
        of the tree asks for get_id();
      - the node count of a subtree, stored on the node that computed it.

    Args:
        element: The annotation element this node wraps.
        parent: Parent node, or None for the root.
        document: Owning TreebankDocument (only read for the root).
        sentence_id: Sentence identifier (only read for the root).
    """

    def __init__(
        self,
        element: ET.Element,
        parent: Optional["TreebankNode"] = None,
        document: Any = None,
        sentence_id: str = "",
    ):
        self.element = element
        self.parent = parent
        if parent is None:
            self.root = self
            self.document = document
            self.sentence_id = sentence_id
        else:
            self.root = parent.root
            self.document = self.root.document
            self.sentence_id = self.root.sentence_id

        self._id_map: Optional[Dict[int, int]] = None
        self._num_of_nodes: Optional[int] = None

    def get_parent(self) -> Optional["TreebankNode"]:
        return self.parent

    def get_root(self) -> "TreebankNode":
        return self.root

    def get_document(self) -> Any:
        return self.document

    def is_root(self) -> bool:
        return self.root is self

    def is_leaf(self) -> bool:
        return self.get_num_of_children() == 0

    def get_children(self) -> List["TreebankNode"]:
        """Return fresh child nodes in document order."""
        return [TreebankNode(child, parent=self) for child in element_children(self.element)]

    def get_num_of_children(self, generation: int = 0) -> int:
        """
        Count the descendants exactly generation + 1 levels below this node.

        generation=0 counts the direct children, generation=1 the
        grandchildren, and so on.
        """
        level = [self.element]
        for _ in range(generation):
            level = [child for e in level for child in element_children(e)]
            if not level:
                return 0
        return sum(len(element_children(e)) for e in level)

    def get_depth(self) -> int:
        """Number of parent links between this node and the root."""
        depth = 0
        node = self
        while node.parent is not None:
            depth += 1
            node = node.parent
        return depth

    def get_raw_id(self) -> Optional[int]:
        """The id given by the annotation, or None if absent/non-numeric."""
        return parse_raw_id(self.element.get("id"))

    def calculate_id_map(self) -> Dict[int, int]:
        """
        Build (once per tree) the map from raw ids to dense 1-based ranks.

        Only ids that actually occur on word elements of the tree get a rank,
        so gaps left by elided tokens do not show in the compact space. The map
        lives on the root node and is shared by every node of the tree.
        """
        root = self.root
        if root._id_map is None:
            present = set()
            for element in iter_tree(root.element):
                if element.tag != WORD_TAG:
                    continue
                raw_id = parse_raw_id(element.get("id"))
                if raw_id is not None:
                    present.add(raw_id)
            root._id_map = {
                raw_id: rank for rank, raw_id in enumerate(sorted(present), start=1)
            }
            logger.debug(
                f"Id map for sentence {root.sentence_id!r}: {len(root._id_map)} ids"
            )
        return root._id_map

    def get_id(self) -> int:
        """
        The position of this word among the ids present in the tree,
        starting from 1. Returns UNKNOWN_ID when the node has no usable id.
        """
        raw_id = self.get_raw_id()
        if raw_id is None:
            return UNKNOWN_ID
        return self.calculate_id_map().get(raw_id, UNKNOWN_ID)

    def get_relation(self) -> str:
        return self.element.get("relation", "")

    def get_lemma(self) -> str:
        return self.element.get("lemma", "")

    def get_pos_tag(self) -> str:
        return self.element.get("postag", "")

    def get_form(self) -> str:
        return self.element.get("form", "")

    def is_synthetic(self) -> bool:
        """True for nodes inserted by the annotator (no surface word)."""
        return is_synthetic_element(self.element)

    def get_height(self) -> int:
        return statistics.get_height(self)

    def get_width(self) -> int:
        return statistics.get_width(self)

    def get_max_family_width(self) -> int:
        return statistics.get_max_family_width(self)

    def get_num_of_nodes(self) -> int:
        return statistics.get_num_of_nodes(self)

    def get_num_of_words(self) -> int:
        return statistics.get_num_of_words(self)

    def apply(self, metrics: Union[Any, Sequence[Any]], sink=None) -> List[float]:
        """
        Apply one metric or a list of metrics to the subtree of this node.

        Returns the values in the order of the metrics. When a sink is given,
        one "<name>: <value>" line per metric is written to it.
        """
        from ..output.sink import format_metric_line

        if not isinstance(metrics, (list, tuple)):
            metrics = [metrics]

        results = []
        for metric in metrics:
            value = metric.apply(self)
            results.append(value)
            if sink is not None:
                sink.write_line(format_metric_line(metric.name, value))
        return results

    def to_string(self, flags: int = 0) -> str:
        """Render the words of this subtree as text (see rendering.render)."""
        from ..rendering.sentence import render

        return render(self, flags)

    def __eq__(self, other) -> bool:
        if not isinstance(other, TreebankNode):
            return NotImplemented
        return self.element is other.element and self.root.element is other.root.element

    def __hash__(self) -> int:
        return hash((id(self.element), id(self.root.element)))

    def __repr__(self) -> str:
        return (
            f"TreebankNode(sentence={self.sentence_id!r}, id={self.element.get('id')!r}, "
            f"form={self.get_form()!r})"
        )
