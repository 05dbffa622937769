import dataclasses

import pytest

from public_suffix_resolver.models import Section
from public_suffix_resolver.rule_tree import RuleNode, RuleTree

CK_DATA = {
    "ICANN_DOMAINS": {"ck": {"*": {}, "www": {"!": {}}}},
    "PRIVATE_DOMAINS": {"io": {"github": {}}},
}


@pytest.fixture
def tree() -> RuleTree:
    return RuleTree.build(CK_DATA)


def test_build_marks_wildcard_and_exception(tree):
    ck = tree.icann.children["ck"]
    assert ck.wildcard
    assert not ck.exception
    assert ck.children["www"].exception
    assert "*" not in ck.children
    assert "!" not in ck.children["www"].children


def test_build_ignores_unknown_sections():
    tree = RuleTree.build({"ICANN_DOMAINS": {"com": {}}, "SOMETHING_ELSE": {"net": {}}})
    assert set(tree.icann.children) == {"com"}
    assert tree.private.children == {}


def test_build_tolerates_non_mapping_leaves():
    tree = RuleTree.build({"ICANN_DOMAINS": {"com": None, "net": []}})
    assert tree.lookup_in_section(("example", "com"), Section.ICANN) == ("com",)
    assert tree.lookup_in_section(("example", "net"), Section.ICANN) == ("net",)


def test_tree_is_read_only(tree):
    with pytest.raises(TypeError):
        tree.icann.children["org"] = RuleNode()
    with pytest.raises(dataclasses.FrozenInstanceError):
        tree.icann.wildcard = True


def test_exception_excludes_label(tree):
    assert tree.lookup_in_section(("www", "ck"), Section.ICANN) == ("ck",)


def test_wildcard_consumes_one_label(tree):
    assert tree.lookup_in_section(("foo", "ck"), Section.ICANN) == ("foo", "ck")
    assert tree.lookup_in_section(("a", "b", "ck"), Section.ICANN) == ("b", "ck")


def test_exception_only_applies_to_exact_label(tree):
    assert tree.lookup_in_section(("www", "foo", "ck"), Section.ICANN) == ("foo", "ck")


def test_walk_stops_at_first_unknown_label(tree):
    assert tree.lookup_in_section(("www", "github", "io"), Section.PRIVATE) == ("github", "io")
    assert tree.lookup_in_section(("example", "org"), Section.ICANN) == ()


def test_sections_are_independent(tree):
    assert tree.lookup_in_section(("foo", "ck"), Section.PRIVATE) == ()
    assert tree.lookup_in_section(("www", "github", "io"), Section.ICANN) == ()


def test_effective_has_no_root(tree):
    with pytest.raises(ValueError):
        tree.lookup_in_section(("example", "com"), Section.EFFECTIVE)


def test_node_count(tree):
    assert tree.node_count(Section.ICANN) == 3
    assert tree.node_count(Section.PRIVATE) == 2


def test_node_count_includes_intermediate_labels():
    tree = RuleTree.build({"PRIVATE_DOMAINS": {"com": {"amazonaws": {"compute": {"*": {}}}}}})
    assert tree.node_count(Section.PRIVATE) == 4
    assert tree.node_count(Section.ICANN) == 0


def test_default_node_is_empty():
    node = RuleNode()
    assert dict(node.children) == {}
    assert not node.wildcard
    assert not node.exception
    assert node.count_nodes() == 0
    with pytest.raises(TypeError):
        node.children["com"] = node


def test_to_dict_rebuilds_same_tree(tree):
    assert tree.to_dict() == CK_DATA
    assert RuleTree.build(tree.to_dict()).to_dict() == CK_DATA
