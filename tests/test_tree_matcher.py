import pytest

from livescroll.matching import CandidateSet, collect_candidates, contains_word
from livescroll.tree.snapshot import SnapshotNode, SnapshotTree, tree_from_dict


class TestContainsWord:

    def test_case_insensitive(self):
        assert contains_word(SnapshotNode(text="Hello World"), "hello")

    def test_substring_match(self):
        assert contains_word(SnapshotNode(text="unbelievable"), "lie")

    def test_label_counts(self):
        assert contains_word(SnapshotNode(label="Close dialog"), "dialog")

    def test_text_or_label(self):
        node = SnapshotNode(text="Figure 1", label="A lazy dog")
        assert contains_word(node, "figure")
        assert contains_word(node, "DOG")

    def test_missing_fields_do_not_contain(self):
        assert not contains_word(SnapshotNode(), "anything")


class TestCandidateSet:

    def test_unique_by_identity_not_text(self):
        a, b = SnapshotNode(text="same"), SnapshotNode(text="same")
        candidates = CandidateSet()
        candidates.add(a)
        candidates.add(b)
        candidates.add(a)
        assert len(candidates) == 2

    def test_sealed_set_only_shrinks(self):
        candidates = CandidateSet()
        candidates.add(SnapshotNode(text="x"))
        candidates.seal()
        with pytest.raises(RuntimeError):
            candidates.add(SnapshotNode(text="y"))

    def test_retain_containing_returns_removed(self):
        keep, drop = SnapshotNode(text="brown fox"), SnapshotNode(text="red fox")
        candidates = CandidateSet()
        candidates.add(keep)
        candidates.add(drop)
        removed = candidates.retain_containing("brown")
        assert removed == [drop]
        assert list(candidates) == [keep]
        assert candidates.only() is keep


class TestCollectCandidates:

    def test_finds_every_containing_node(self, article_tree):
        found = collect_candidates("quick", article_tree.root(), article_tree.release)
        assert [n.text for n in found] == ["The quick red fox naps", "A QUICK Brown fox jumps"]

    def test_matches_labels_in_preorder(self, article_tree):
        found = collect_candidates("fox", article_tree.root(), article_tree.release)
        assert [n.text or n.label for n in found] == [
            "The quick red fox naps",
            "A QUICK Brown fox jumps",
            "Photo of a fox",
        ]

    def test_non_matching_nodes_released(self, article_tree):
        found = collect_candidates("quick", article_tree.root(), article_tree.release)
        assert article_tree.released == 4
        assert {id(n) for n in article_tree.outstanding} == {id(n) for n in found}

    def test_parent_and_child_both_match(self):
        tree = tree_from_dict({"text": "river bank", "children": [{"text": "the bank"}]})
        found = collect_candidates("bank", tree.root(), tree.release)
        assert len(found) == 2

    def test_empty_tree(self):
        tree = SnapshotTree(None)
        assert len(collect_candidates("word", tree.root(), tree.release)) == 0

    def test_failed_walk_releases_borrowed_nodes(self):
        class Reclaimed(SnapshotNode):
            def children(self):
                raise RuntimeError("node reclaimed")

        root = SnapshotNode(text="elephant root", children=[
            SnapshotNode(text="elephant one"),
            Reclaimed(text="elephant two"),
            SnapshotNode(text="never reached"),
        ])
        tree = SnapshotTree(root)
        with pytest.raises(RuntimeError, match="node reclaimed"):
            collect_candidates("elephant", tree.root(), tree.release)
        assert tree.outstanding == []
        assert tree.released == 4

    def test_visits_each_node_once(self):
        visits = []

        class CountingNode(SnapshotNode):
            def children(self):
                visits.append(self.text)
                return super().children()

        leaves = [CountingNode(text=f"leaf {i}") for i in range(3)]
        root = CountingNode(text="root", children=leaves)
        tree = SnapshotTree(root)
        collect_candidates("leaf", tree.root(), tree.release)
        assert visits == ["root", "leaf 0", "leaf 1", "leaf 2"]
