import logging
import xml.etree.ElementTree as ET
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

from .node import TreebankNode
from ..output.sink import format_sentence_line

logger = logging.getLogger(__name__)

SENTENCE_TAG = "sentence"


def select_parse(sentence: ET.Element) -> ET.Element:
    """
    Pick the analyzable parse of a <sentence>.

    A sentence may carry several candidate parses; the one with the most
    immediate children wins, ties going to the first. A sentence without
    child elements is its own (empty) parse.
    """
    candidates = list(sentence)
    if not candidates:
        return sentence

    best = candidates[0]
    for candidate in candidates[1:]:
        if len(candidate) > len(best):
            best = candidate
    return best


class TreebankDocument:
    """
    One treebank file: a title and a sequence of annotated sentences.

    Sentence roots are built on first access and cached, so every metric
    applied during a session sees the same compact id map for a sentence.
    """

    def __init__(
        self, xml: ET.Element, document_id: str = "", source_path: str = ""
    ):
        self.xml = xml
        self.id = document_id
        self.source_path = source_path
        self._sentence_elements: List[ET.Element] = list(xml.iter(SENTENCE_TAG))
        self._sentences: Dict[int, TreebankNode] = {}

    def get_title(self) -> str:
        for field in self.xml.iter("field"):
            if field.get("name") == "title":
                return field.get("value", "")
        return ""

    def get_num_of_sentences(self) -> int:
        return len(self._sentence_elements)

    def get_sentence(self, i: int) -> Optional[TreebankNode]:
        """Return sentence i (0-based) as a root node, or None if out of range."""
        if i < 0 or i >= len(self._sentence_elements):
            return None

        if i not in self._sentences:
            element = self._sentence_elements[i]
            root = TreebankNode(
                select_parse(element),
                document=self,
                sentence_id=element.get("id", ""),
            )
            root.calculate_id_map()
            self._sentences[i] = root
        return self._sentences[i]

    def iter_sentences(self) -> Iterator[TreebankNode]:
        for i in range(self.get_num_of_sentences()):
            yield self.get_sentence(i)

    def get_num_of_nodes(self) -> int:
        """Sum of the node counts of all sentences."""
        return sum(s.get_num_of_nodes() for s in self.iter_sentences())

    def apply(
        self,
        metrics: Union[Any, Sequence[Any]],
        sink=None,
        precision: int = 2,
    ) -> List[List[float]]:
        """
        Apply the metrics to every sentence.

        Returns one list of values per sentence. With a sink, writes one line
        per sentence: the sentence id followed by the values.
        """
        results = []
        for sentence in self.iter_sentences():
            values = sentence.apply(metrics)
            results.append(values)
            if sink is not None:
                sink.write_line(
                    format_sentence_line(
                        sentence.sentence_id, values, precision=precision
                    )
                )
        return results

    def __len__(self) -> int:
        return self.get_num_of_sentences()

    def __repr__(self) -> str:
        return (
            f"TreebankDocument(id={self.id!r}, title={self.get_title()!r}, "
            f"sentences={self.get_num_of_sentences()})"
        )
