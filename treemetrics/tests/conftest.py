import pytest


NESTED_TREEBANK = """<?xml version="1.0" encoding="UTF-8"?>
<treebank>
  <field name="title" value="Orationes"/>
  <sentence id="s1">
    <root>
      <word id="1" form="Hello" lemma="hello" postag="i" relation="ExD"/>
      <word id="2" form="," postag="u" relation="AuxX"/>
      <word id="3" form="world" lemma="world" postag="n" relation="OBJ"/>
    </root>
  </sentence>
  <sentence id="s2">
    <root>
      <word id="1" form="ἔλεγεν" lemma="λέγω" postag="v3iia" relation="PRED">
        <word id="2" form="ὁ" lemma="ὁ" postag="l" relation="ATR"/>
        <word id="3" form="ἀνήρ" lemma="ἀνήρ" postag="n" relation="SBJ">
          <word id="4" form="ἀγαθός" lemma="ἀγαθός" postag="a" relation="ATR"/>
        </word>
      </word>
      <word id="5" form="·" postag="u" relation="AuxK"/>
    </root>
  </sentence>
</treebank>
"""

FLAT_TREEBANK = """<?xml version="1.0" encoding="UTF-8"?>
<treebank>
  <field name="title" value="Flat"/>
  <sentence id="f1">
    <word id="1" form="arma" head="2" relation="OBJ"/>
    <word id="2" form="cano" head="0" relation="PRED"/>
    <word id="3" form="virumque" head="2" relation="OBJ"/>
  </sentence>
</treebank>
"""


def sentence_xml(body: str, sentence_id: str = "s1", title: str = "Test") -> str:
    """Wrap the children of a single <root> parse into a treebank document."""
    return (
        f'<treebank><field name="title" value="{title}"/>'
        f'<sentence id="{sentence_id}"><root>{body}</root></sentence></treebank>'
    )


def words_xml(*forms: str) -> str:
    """Flat leaf words with ids 1..n under the root."""
    return "".join(f'<word id="{i}" form="{form}"/>' for i, form in enumerate(forms, 1))


@pytest.fixture
def make_sentence():
    """Build the first sentence of a one-sentence treebank from a <root> body."""
    from treemetrics.treebank.loader import parse_document

    def _make(body: str, sentence_id: str = "s1"):
        document = parse_document(sentence_xml(body, sentence_id), document_id="test")
        return document.get_sentence(0)

    return _make


@pytest.fixture
def nested_document():
    from treemetrics.treebank.loader import parse_document

    return parse_document(NESTED_TREEBANK, document_id="orationes")


@pytest.fixture
def flat_document():
    from treemetrics.treebank.loader import parse_document

    return parse_document(FLAT_TREEBANK, document_id="flat")


@pytest.fixture
def three_leaves(make_sentence):
    """Root with three leaf children (ids 1-3): four nodes in total."""
    return make_sentence(words_xml("a", "b", "c"))


@pytest.fixture
def treebank_dir(tmp_path):
    """Directory with two treebank files, a.xml and b.xml."""
    directory = tmp_path / "treebanks"
    directory.mkdir()
    (directory / "a.xml").write_text(NESTED_TREEBANK, encoding="utf-8")
    (directory / "b.xml").write_text(FLAT_TREEBANK, encoding="utf-8")
    return directory
