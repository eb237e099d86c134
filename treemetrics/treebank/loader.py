import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, List, Optional, Union

from .document import SENTENCE_TAG, TreebankDocument
from .elements import WORD_TAG, parse_raw_id

logger = logging.getLogger(__name__)

ROOT_TAG = "root"


class TreebankFormatError(ValueError):
    """Raised when a treebank source is not well-formed XML."""


def parse_document(
    xml_text: Union[str, bytes], document_id: str = "", source_path: str = ""
) -> TreebankDocument:
    """Parse treebank XML text into a TreebankDocument."""
    try:
        xml = ET.fromstring(xml_text)
    except ET.ParseError as e:
        where = f" in {source_path}" if source_path else ""
        raise TreebankFormatError(f"Invalid treebank XML{where}: {e}") from e

    for sentence in xml.iter(SENTENCE_TAG):
        if _is_flat(sentence):
            _nest_flat_sentence(sentence)

    return TreebankDocument(xml, document_id=document_id, source_path=source_path)


def load_document(path: Union[str, Path]) -> TreebankDocument:
    """Load a treebank XML file. The document id is the file stem."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Treebank file not found: {path}")

    document = parse_document(
        path.read_bytes(), document_id=path.stem, source_path=str(path)
    )
    logger.info(
        f"Loaded {path.name}: {document.get_num_of_sentences()} sentences"
    )
    return document


def _is_flat(sentence: ET.Element) -> bool:
    """
    True for AGDT-style sentences: word children that point at their head
    through a head attribute instead of being nested.
    """
    words = sentence.findall(WORD_TAG)
    if not words:
        return False
    if any(w.find(WORD_TAG) is not None for w in words):
        return False
    return any("head" in w.attrib for w in words)


def _nest_flat_sentence(sentence: ET.Element) -> None:
    """
    Rebuild a flat sentence as a nested tree under a <root> element.

    Words with head 0, no head, or a head that does not exist hang from the
    root. Cycles are broken by moving one word of the cycle to the root.
    """
    words = sentence.findall(WORD_TAG)
    sentence_id = sentence.get("id", "")

    by_id: Dict[int, ET.Element] = {}
    for word in words:
        raw_id = parse_raw_id(word.get("id"))
        if raw_id is not None and raw_id not in by_id:
            by_id[raw_id] = word

    parent_of: Dict[int, Optional[ET.Element]] = {}
    for word in words:
        head = parse_raw_id(word.get("head"))
        target = None
        if head not in (None, 0):
            target = by_id.get(head)
            if target is None:
                logger.warning(
                    f"Sentence {sentence_id}: word {word.get('id')} has unknown "
                    f"head {head}, attaching to root"
                )
        parent_of[id(word)] = target

    for word in words:
        seen = set()
        current = word
        while current is not None:
            if id(current) in seen:
                logger.warning(
                    f"Sentence {sentence_id}: cycle through word "
                    f"{current.get('id')}, attaching it to root"
                )
                parent_of[id(current)] = None
                break
            seen.add(id(current))
            current = parent_of[id(current)]

    for word in words:
        sentence.remove(word)

    root = ET.SubElement(sentence, ROOT_TAG)
    for word in words:
        parent = parent_of[id(word)]
        if parent is None:
            root.append(word)
        else:
            parent.append(word)


def collect_treebank_files(path: Union[str, Path], pattern: str = "*.xml") -> List[Path]:
    """Collect treebank files from a file or directory path."""
    path = Path(path)
    if path.is_file():
        return [path] if path.suffix.lower() == ".xml" else []
    return sorted(path.glob(pattern))
