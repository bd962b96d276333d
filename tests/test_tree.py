"""
Tests for ogscrape/tree.py MetaTree insertion.

Covers scalar assignment, list growth for repeated paths, promotion of
scalars to subtrees, and redirection of nested paths into the latest
list element.
"""
import pytest

from ogscrape.tree import insert, split_path


class TestSplitPath:
    """Test property path splitting."""

    def test_single_segment(self):
        assert split_path("title") == ["title"]

    def test_nested_segments(self):
        assert split_path("image:width") == ["image", "width"]

    def test_empty_segments_kept(self):
        """Empty segments are kept as empty-string keys."""
        assert split_path("a::b") == ["a", "", "b"]


class TestInsertScalars:
    """Test insertion of single values."""

    def test_insert_into_empty_tree(self):
        tree = {}
        insert(tree, "title", "Hello")
        assert tree == {"title": "Hello"}

    def test_insert_returns_same_tree(self):
        tree = {}
        assert insert(tree, "title", "Hello") is tree

    def test_insert_nested_creates_maps(self):
        tree = insert({}, "image:width", "100")
        assert tree == {"image": {"width": "100"}}

    def test_insert_accepts_segment_sequence(self):
        tree = insert({}, ["video", "url"], "v.mp4")
        assert tree == {"video": {"url": "v.mp4"}}

    def test_siblings_share_parent(self):
        tree = {}
        insert(tree, "image:url", "a.png")
        insert(tree, "image:width", "100")
        assert tree == {"image": {"url": "a.png", "width": "100"}}

    def test_empty_value(self):
        """Empty strings are stored like any other value."""
        tree = insert({}, "description", "")
        assert tree == {"description": ""}

    def test_empty_path_rejected(self):
        with pytest.raises(ValueError):
            insert({}, [], "x")


class TestInsertRepeated:
    """Test repeated insertion at the same final path."""

    def test_second_value_makes_list(self):
        tree = {}
        insert(tree, "p", "a")
        insert(tree, "p", "b")
        assert tree == {"p": ["a", "b"]}

    def test_third_value_appends(self):
        """A third value extends the list instead of nesting it."""
        tree = {}
        for value in ("a", "b", "c"):
            insert(tree, "p", value)
        assert tree == {"p": ["a", "b", "c"]}

    def test_repeated_nested_leaf(self):
        tree = {}
        insert(tree, "locale:alternate", "fr_FR")
        insert(tree, "locale:alternate", "es_ES")
        assert tree == {"locale": {"alternate": ["fr_FR", "es_ES"]}}

    def test_subtree_then_scalar_at_same_key(self):
        """A value landing on an existing subtree turns the slot into a list."""
        tree = {}
        insert(tree, "image:url", "a.png")
        insert(tree, "image", "b.png")
        assert tree == {"image": [{"url": "a.png"}, "b.png"]}


class TestInsertPromotion:
    """Test promotion of scalars and redirection into lists."""

    def test_scalar_promoted_to_map(self):
        """A scalar on an intermediate segment moves under the empty key."""
        tree = {}
        insert(tree, "type", "video")
        insert(tree, "type:kind", "movie")
        assert tree == {"type": {"": "video", "kind": "movie"}}

    def test_nested_path_goes_to_last_list_element(self):
        tree = {}
        insert(tree, "title", "t1")
        insert(tree, "title", "t2")
        insert(tree, "title:sub", "s")
        assert tree == {"title": ["t1", {"": "t2", "sub": "s"}]}

    def test_list_of_subtrees_extends_latest(self):
        tree = {}
        insert(tree, "image:url", "a.png")
        insert(tree, "image", "b.png")
        insert(tree, "image:width", "200")
        assert tree == {"image": [{"url": "a.png"}, {"": "b.png", "width": "200"}]}

    def test_url_width_url_collision(self):
        """A second url joins the first one; width stays on the shared map."""
        tree = {}
        insert(tree, "image:url", "u1")
        insert(tree, "image:width", "100")
        insert(tree, "image:url", "u2")
        assert tree == {"image": {"url": ["u1", "u2"], "width": "100"}}

    def test_deep_promotion(self):
        tree = {}
        insert(tree, "a:b", "x")
        insert(tree, "a:b:c:d", "y")
        assert tree == {"a": {"b": {"": "x", "c": {"d": "y"}}}}
