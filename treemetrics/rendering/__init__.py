from .sentence import RenderFlag, is_punctuation, render
from .transliteration import GREEK_TO_LATIN, transliterate

__all__ = ["RenderFlag", "is_punctuation", "render", "GREEK_TO_LATIN", "transliterate"]
