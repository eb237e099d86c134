import xml.etree.ElementTree as ET
from enum import IntFlag
from typing import List

from ..treebank.elements import WORD_TAG, is_synthetic_element, iter_tree, parse_raw_id
from .transliteration import transliterate

JOIN_MARKER = "-"

_PUNCTUATION_CHARS = {
    ".",
    ",",
    "'",
    '"',
    ";",
    "-",
    "(",
    ")",
    "·",  # middle dot
    "–",  # en dash
    "“",
    "”",
    "’",
    "᾽",  # koronis
}


class RenderFlag(IntFlag):
    NONE = 0
    EXCLUDE_PUNCTUATION = 2
    INCLUDE_SYNTHETIC = 4
    TRANSLITERATE = 8


def is_punctuation(form: str) -> bool:
    if len(form) == 1:
        return form in _PUNCTUATION_CHARS
    return form == "..."


def _ordered_words(element: ET.Element) -> List[ET.Element]:
    """Word elements of the subtree in sentence order (by raw id)."""
    words = [e for e in iter_tree(element) if e.tag == WORD_TAG]
    keyed = []
    for position, word in enumerate(words):
        raw_id = parse_raw_id(word.get("id"))
        keyed.append((raw_id is None, raw_id or 0, position, word))
    keyed.sort(key=lambda entry: entry[:3])
    return [entry[3] for entry in keyed]


def render(node, flags: int = RenderFlag.NONE) -> str:
    """
    Rebuild the surface text of the subtree of node.

    Words are put back in sentence order. A form starting with "-" is glued
    to the previous word and a form ending with "-" is glued to the next one
    (the marker is dropped). Punctuation attaches to the previous word, except
    "(" which attaches to the following one. The result always ends with a
    single space.

    Flags:
        EXCLUDE_PUNCTUATION: drop punctuation tokens and trailing punctuation.
        INCLUDE_SYNTHETIC: also render words inserted by the annotator.
        TRANSLITERATE: map Greek letters to Latin ones.
    """
    flags = RenderFlag(flags)
    exclude_punctuation = bool(flags & RenderFlag.EXCLUDE_PUNCTUATION)
    include_synthetic = bool(flags & RenderFlag.INCLUDE_SYNTHETIC)

    text = ""
    no_space = False
    no_space_after = False

    for word in _ordered_words(node.element):
        form = word.get("form", "")
        if len(form) > 1:
            if form.startswith(JOIN_MARKER):
                form = form[1:]
                no_space = True
            elif form.endswith(JOIN_MARKER):
                form = form[:-1]
                no_space_after = True

        if (
            exclude_punctuation
            and form
            and not is_punctuation(form)
            and is_punctuation(form[-1])
        ):
            form = form[:-1]

        if not form:
            continue
        if not include_synthetic and is_synthetic_element(word):
            continue

        if is_punctuation(form):
            if exclude_punctuation:
                continue
            if form == "(":
                text += " (" if text else "("
                no_space = True
            else:
                text += form
        else:
            if no_space or not text:
                text += form
                no_space = False
            else:
                text += " " + form

            if no_space_after:
                no_space_after = False
                no_space = True

    text += " "

    if flags & RenderFlag.TRANSLITERATE:
        text = transliterate(text)

    return text
