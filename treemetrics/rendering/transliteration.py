"""
Greek to Latin transliteration, one Latin letter per Greek letter family.

Every case, accent, breathing and iota-subscript variant of a Greek letter
(basic Greek and the Greek Extended block) maps to the same Latin letter.
Characters without an entry pass through unchanged.
"""

from typing import Dict, Iterable, Tuple, Union

CodePoints = Iterable[Union[int, Tuple[int, int]]]

# Letter families in lookup order: a code point listed in two families keeps
# the first one.
_FAMILIES: Tuple[Tuple[str, CodePoints], ...] = (
    ("A", (902, 913, 940, 945, (7936, 7951), 8048, 8049, (8064, 8079), (8112, 8124))),
    ("E", (904, 917, 941, 949, (7952, 7967), 8050, 8051, 8136, 8137)),
    (
        "H",
        (905, 919, 942, 951, (7968, 7983), 8052, 8053, (8080, 8095), (8130, 8135), (8138, 8140)),
    ),
    ("I", (906, 912, 921, 938, 943, 953, 970, (7984, 7999), 8054, 8055, (8144, 8155))),
    ("O", (908, 927, 959, 972, (8000, 8015), 8056, 8057, 8084, 8085)),
    (
        "Y",
        (910, 933, 939, 965, 971, 973, (8016, 8031), 8058, 8059, (8160, 8163), (8166, 8171)),
    ),
    (
        "W",
        (911, 937, 969, 974, (8032, 8047), 8060, 8061, (8096, 8111), (8178, 8183), (8186, 8188)),
    ),
    ("R", (929, 961, 8164, 8165, 8172)),
    ("B", (914, 946)),
    ("G", (915, 947)),
    ("D", (916, 948)),
    ("Z", (918, 950)),
    ("U", (920, 952)),
    ("K", (922, 954)),
    ("L", (923, 955)),
    ("M", (924, 956)),
    ("N", (925, 957)),
    ("J", (926, 958)),
    ("P", (928, 960)),
    ("S", (931, 962, 963)),
    ("T", (932, 964)),
    ("F", (934, 966)),
    ("X", (935, 967)),
    ("C", (936, 968)),
)


def _build_table() -> Dict[int, str]:
    table: Dict[int, str] = {}
    for letter, code_points in _FAMILIES:
        for entry in code_points:
            if isinstance(entry, tuple):
                start, end = entry
                codes = range(start, end + 1)
            else:
                codes = (entry,)
            for code in codes:
                table.setdefault(code, letter)
    return table


GREEK_TO_LATIN: Dict[int, str] = _build_table()


def transliterate(text: str) -> str:
    """Map every Greek character of text to its Latin letter family."""
    return text.translate(GREEK_TO_LATIN)
