import pytest

from treemetrics.rendering import GREEK_TO_LATIN, RenderFlag, is_punctuation, render, transliterate


def leaves(*forms, synthetic=()):
    body = ""
    for i, form in enumerate(forms, 1):
        extra = ' insertion_id="x"' if i in synthetic else ""
        body += f'<word id="{i}" form="{form}"{extra}/>'
    return body


class TestRender:
    def test_plain_sentence(self, make_sentence):
        root = make_sentence(leaves("Hello", ",", "world", "."))
        assert render(root) == "Hello, world. "

    def test_exclude_punctuation(self, make_sentence):
        root = make_sentence(leaves("Hello", ",", "world", "."))
        assert render(root, RenderFlag.EXCLUDE_PUNCTUATION) == "Hello world "

    def test_trailing_punctuation_stripped_when_excluded(self, make_sentence):
        root = make_sentence(leaves("Hello", "world."))
        assert render(root) == "Hello world. "
        assert render(root, RenderFlag.EXCLUDE_PUNCTUATION) == "Hello world "

    def test_words_in_id_order(self, make_sentence):
        root = make_sentence(
            '<word id="2" form="world"><word id="1" form="Hello"/></word>'
        )
        assert render(root) == "Hello world "

    def test_leading_marker_joins_previous(self, make_sentence):
        root = make_sentence(leaves("arma", "-que", "virum"))
        assert render(root) == "armaque virum "

    def test_trailing_marker_joins_next(self, make_sentence):
        root = make_sentence(leaves("pre", "fix-", "ed", "word"))
        assert render(root) == "pre fixed word "

    def test_bare_hyphen_is_punctuation(self, make_sentence):
        root = make_sentence(leaves("a", "-", "b"))
        assert render(root) == "a- b "
        assert render(root, RenderFlag.EXCLUDE_PUNCTUATION) == "a b "

    def test_opening_parenthesis(self, make_sentence):
        root = make_sentence(leaves("a", "(", "b", ")"))
        assert render(root) == "a (b) "

    def test_synthetic_words_are_optional(self, make_sentence):
        root = make_sentence(leaves("Hello", "est", "world", synthetic=(2,)))
        assert render(root) == "Hello world "
        assert render(root, RenderFlag.INCLUDE_SYNTHETIC) == "Hello est world "

    def test_empty_forms_are_skipped(self, make_sentence):
        root = make_sentence(leaves("Hello", "", "world"))
        assert render(root) == "Hello world "

    def test_empty_tree(self, make_sentence):
        assert render(make_sentence("")) == " "

    def test_subtree_includes_its_node(self, make_sentence):
        root = make_sentence(
            '<word id="2" form="world"><word id="1" form="Hello"/></word>'
            '<word id="3" form="again"/>'
        )
        assert render(root.get_children()[0]) == "Hello world "

    def test_combined_flags(self, make_sentence):
        root = make_sentence(leaves("λόγος", "."))
        flags = RenderFlag.EXCLUDE_PUNCTUATION | RenderFlag.TRANSLITERATE
        assert render(root, flags) == "LOGOS "
        assert render(root, int(flags)) == "LOGOS "


class TestPunctuation:
    @pytest.mark.parametrize("form", [".", ",", ";", "(", ")", "·", "...", "-"])
    def test_punctuation(self, form):
        assert is_punctuation(form)

    @pytest.mark.parametrize("form", ["a", "word", "..", ""])
    def test_not_punctuation(self, form):
        assert not is_punctuation(form)


class TestTransliteration:
    def test_word(self):
        assert transliterate("λόγος") == "LOGOS"

    def test_case_and_accent_variants_collapse(self):
        variants = ["α", "Α", "ά", "ἀ", "ἄ", "ᾳ", "ὰ"]
        assert {transliterate(v) for v in variants} == {"A"}

    def test_omega_family(self):
        assert {transliterate(v) for v in ["ω", "Ω", "ώ", "ῳ", "ὠ"]} == {"W"}

    def test_non_greek_untouched(self):
        assert transliterate("abc 123, XYZ") == "abc 123, XYZ"

    def test_first_family_wins_on_overlap(self):
        assert GREEK_TO_LATIN[8084] == "H"
