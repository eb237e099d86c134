import pytest

from treemetrics.output.sink import MemorySink
from treemetrics.treebank import UNKNOWN_ID, TreebankNode


NESTED_IDS = (
    '<word id="10" form="c">'
    '<word id="3" form="a"/>'
    '<word id="7" form="b"/>'
    "</word>"
)


class TestNavigation:
    def test_root_has_no_parent(self, three_leaves):
        assert three_leaves.get_parent() is None
        assert three_leaves.is_root()
        assert three_leaves.get_root() is three_leaves

    def test_children_point_back_to_root(self, three_leaves):
        children = three_leaves.get_children()
        assert len(children) == 3
        for child in children:
            assert child.get_parent() == three_leaves
            assert child.get_root() is three_leaves
            assert not child.is_root()
            assert child.is_leaf()

    def test_children_in_document_order(self, make_sentence):
        root = make_sentence(NESTED_IDS)
        top = root.get_children()[0]
        assert [c.get_form() for c in top.get_children()] == ["a", "b"]

    def test_children_are_fresh_but_equal(self, three_leaves):
        first = three_leaves.get_children()
        second = three_leaves.get_children()
        assert first[0] is not second[0]
        assert first[0] == second[0]
        assert hash(first[0]) == hash(second[0])
        assert first[0] != first[1]

    def test_num_of_children_by_generation(self, nested_document):
        root = nested_document.get_sentence(1)
        assert root.get_num_of_children() == 2
        assert root.get_num_of_children(1) == 2
        assert root.get_num_of_children(2) == 1
        assert root.get_num_of_children(3) == 0
        assert root.get_num_of_children(10) == 0

    def test_depth(self, nested_document):
        root = nested_document.get_sentence(1)
        verb = root.get_children()[0]
        noun = verb.get_children()[1]
        adjective = noun.get_children()[0]
        assert root.get_depth() == 0
        assert verb.get_depth() == 1
        assert adjective.get_depth() == 3

    def test_document_and_sentence_id_are_inherited(self, nested_document):
        root = nested_document.get_sentence(0)
        child = root.get_children()[0]
        assert child.get_document() is nested_document
        assert child.sentence_id == "s1"


class TestCompactIds:
    def test_ids_are_dense_ranks(self, make_sentence):
        root = make_sentence(NESTED_IDS)
        top = root.get_children()[0]
        a, b = top.get_children()
        assert a.get_id() == 1
        assert b.get_id() == 2
        assert top.get_id() == 3

    def test_ids_form_permutation(self, nested_document):
        root = nested_document.get_sentence(1)
        ids = []
        stack = [root]
        while stack:
            node = stack.pop()
            if node.get_raw_id() is not None:
                ids.append(node.get_id())
            stack.extend(node.get_children())
        assert sorted(ids) == list(range(1, len(ids) + 1))

    def test_gaps_are_closed(self, make_sentence):
        root = make_sentence(
            '<word id="1" form="a"/><word id="2" form="b"/><word id="5" form="c"/>'
        )
        assert [c.get_id() for c in root.get_children()] == [1, 2, 3]

    def test_id_map_is_computed_once(self, three_leaves):
        first = three_leaves.calculate_id_map()
        second = three_leaves.get_children()[0].calculate_id_map()
        assert first is second
        assert first == {1: 1, 2: 2, 3: 3}

    def test_missing_id_is_unknown(self, make_sentence):
        root = make_sentence('<word form="a"/><word id="x" form="b"/><word id="4" form="c"/>')
        children = root.get_children()
        assert children[0].get_id() == UNKNOWN_ID
        assert children[1].get_id() == UNKNOWN_ID
        assert children[2].get_id() == 1
        assert children[1].get_raw_id() is None

    def test_synthetic_root_has_unknown_id(self, three_leaves):
        assert three_leaves.get_id() == UNKNOWN_ID


class TestAttributes:
    def test_annotation_attributes(self, nested_document):
        verb = nested_document.get_sentence(1).get_children()[0]
        assert verb.get_form() == "ἔλεγεν"
        assert verb.get_lemma() == "λέγω"
        assert verb.get_pos_tag() == "v3iia"
        assert verb.get_relation() == "PRED"

    def test_absent_attributes_are_empty(self, three_leaves):
        assert three_leaves.get_form() == ""
        assert three_leaves.get_lemma() == ""
        assert three_leaves.get_relation() == ""
        assert three_leaves.get_pos_tag() == ""

    def test_synthetic_flag(self, make_sentence):
        root = make_sentence('<word id="1" form="a"/><word id="2" form="est" insertion_id="0001e"/>')
        real, inserted = root.get_children()
        assert not real.is_synthetic()
        assert inserted.is_synthetic()


class TestApply:
    def test_single_metric_is_wrapped(self, three_leaves):
        from treemetrics.metrics import NodeMetric

        metric = NodeMetric("Nodes", metric=lambda node: 1)
        assert three_leaves.apply(metric) == [4]

    def test_apply_writes_lines_to_sink(self, three_leaves):
        from treemetrics.metrics import NodeMetric

        sink = MemorySink()
        metrics = [
            NodeMetric("Nodes", metric=lambda node: 1),
            NodeMetric("Zero"),
        ]
        values = three_leaves.apply(metrics, sink=sink)
        assert values == [4, 0]
        assert sink.lines == ["Nodes: 4", "Zero: 0"]

    def test_to_string_renders_subtree(self, nested_document):
        assert nested_document.get_sentence(0).to_string() == "Hello, world "

    def test_repr_mentions_sentence(self, three_leaves):
        assert "s1" in repr(three_leaves)
        assert isinstance(three_leaves, TreebankNode)
