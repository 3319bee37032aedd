import pytest

from data_model import (
    AmbiguousBlockName,
    ErrorCode,
    NoMatchingBlock,
    SelectionRequest,
    UnsatisfiableDependencies,
)
from org_parser import parse_document
from router import complete_name, select


def _block(name=None, lang="python", body="pass", tangle=None, deps=None):
    parts = []
    if name:
        parts.append(f"#+NAME: {name}")
    if deps:
        parts.append(f"#+DEPS: {deps}")
    header = f"#+BEGIN_SRC {lang}" + (f" :tangle {tangle}" if tangle else "")
    parts += [header, body, "#+END_SRC"]
    return "\n".join(parts) + "\n"


def _doc(*blocks):
    return parse_document("".join(blocks), "notes.org")


def _bodies(group):
    return [f.content for f in group.fragments]


# ---------------------------------------------------------------------------
# complete_name
# ---------------------------------------------------------------------------

def test_exact_name_beats_prefix():
    assert complete_name("foo", ["foo", "foobar"]) == "foo"


def test_unique_prefix_completes():
    assert complete_name("foob", ["foo", "foobar", None]) == "foobar"


def test_prefix_counts_blocks_not_names():
    with pytest.raises(AmbiguousBlockName):
        complete_name("foob", ["foobar", "foobar"])
    assert complete_name("foobar", ["foobar", "foobar"]) == "foobar"


def test_ambiguous_prefix_lists_candidates():
    with pytest.raises(AmbiguousBlockName) as exc:
        complete_name("fo", ["foobar", "foo", "bar"])
    assert exc.value.candidates == ["foo", "foobar"]
    assert exc.value.code == ErrorCode.AMBIGUOUS_BLOCK_NAME


def test_unknown_prefix():
    with pytest.raises(NoMatchingBlock) as exc:
        complete_name("x", ["foo"])
    assert exc.value.code == ErrorCode.NO_MATCHING_BLOCK


# ---------------------------------------------------------------------------
# BY_NAME
# ---------------------------------------------------------------------------

def test_by_name_prefix_scenario():
    doc = _doc(_block("foo", body="1"), _block("foobar", body="2"))
    with pytest.raises(AmbiguousBlockName) as exc:
        select(doc, SelectionRequest.by_name("fo"))
    assert exc.value.candidates == ["foo", "foobar"]

    [group] = select(_doc(_block("foo", body="1")), SelectionRequest.by_name("fo"))
    assert _bodies(group) == ["1"]


def test_by_name_collects_every_block_with_that_name():
    doc = _doc(_block("foo", body="1"), _block("other"), _block("foo", body="2"))
    [group] = select(doc, SelectionRequest.by_name("foo"))
    assert _bodies(group) == ["1", "2"]
    assert group.language == "python"


def test_by_name_puts_dependencies_first():
    doc = _doc(
        _block("main", body="main()", deps="helpers"),
        _block("helpers", body="def helper(): ..."),
        _block("unrelated", body="nope"),
    )
    [group] = select(doc, SelectionRequest.by_name("main"))
    assert _bodies(group) == ["def helper(): ...", "main()"]


def test_transitive_dependencies_keep_document_order_otherwise():
    doc = _doc(
        _block("c", body="c"),
        _block("a", body="a", deps="b"),
        _block("b", body="b", deps="c"),
    )
    [group] = select(doc, SelectionRequest.by_name("a"))
    assert _bodies(group) == ["c", "b", "a"]


def test_missing_dependency():
    doc = _doc(_block("main", deps="ghost"))
    with pytest.raises(UnsatisfiableDependencies) as exc:
        select(doc, SelectionRequest.by_name("main"))
    assert exc.value.names == ["ghost"]


def test_dependency_cycle():
    doc = _doc(_block("a", deps="b"), _block("b", deps="a"))
    with pytest.raises(UnsatisfiableDependencies):
        select(doc, SelectionRequest.by_name("a"))


def test_by_name_language_filter():
    doc = _doc(_block("util", body="py"), _block("util", lang="rust", body="rs"))
    [group] = select(doc, SelectionRequest.by_name("util", language="rust"))
    assert _bodies(group) == ["rs"]
    assert group.language == "rust"

    with pytest.raises(NoMatchingBlock):
        select(doc, SelectionRequest.by_name("util", language="c"))


def test_by_name_shared_target_is_kept():
    doc = _doc(_block("a", tangle="a.py", deps="b"), _block("b", tangle="a.py"))
    [group] = select(doc, SelectionRequest.by_name("a"))
    assert group.target == "a.py"


# ---------------------------------------------------------------------------
# BY_LANGUAGE
# ---------------------------------------------------------------------------

def test_by_language_ignores_targets():
    doc = _doc(
        _block(body="1", tangle="a.py"),
        _block(lang="rust", body="r"),
        _block(body="2", tangle="b.py"),
        _block(body="3"),
    )
    [group] = select(doc, SelectionRequest.by_language("python"))
    assert group.target is None
    assert _bodies(group) == ["1", "2", "3"]


def test_by_language_without_blocks():
    with pytest.raises(NoMatchingBlock):
        select(_doc(_block()), SelectionRequest.by_language("go"))


# ---------------------------------------------------------------------------
# ALL_TANGLED
# ---------------------------------------------------------------------------

def test_all_tangled_groups_by_target_in_document_order():
    doc = _doc(
        _block(body="x=1", tangle="foo.py"),
        _block(body="skipped"),
        _block(body="b", tangle="bar.py"),
        _block(body="y=2", tangle="foo.py"),
    )
    groups = select(doc, SelectionRequest.all_tangled())
    assert [g.target for g in groups] == ["foo.py", "bar.py"]
    assert _bodies(groups[0]) == ["x=1", "y=2"]
    assert [f.position for f in groups[0].fragments] == [0, 3]


def test_all_tangled_auto_targets_group_by_language():
    doc = _doc(
        _block(body="p1", tangle="yes"),
        _block(lang="rust", body="r", tangle="yes"),
        _block(body="p2", tangle="yes"),
    )
    groups = select(doc, SelectionRequest.all_tangled())
    assert [(g.target, g.language) for g in groups] == [(None, "python"), (None, "rust")]
    assert _bodies(groups[0]) == ["p1", "p2"]


def test_all_tangled_without_targets_is_empty():
    assert select(_doc(_block(), _block()), SelectionRequest.all_tangled()) == []


def test_prefix_matching_two_blocks_is_ambiguous_even_with_one_name():
    doc = _doc(_block("foobar", body="1"), _block("foobar", body="2"))
    with pytest.raises(AmbiguousBlockName) as exc:
        select(doc, SelectionRequest.by_name("foo"))
    assert exc.value.candidates == ["foobar", "foobar"]

    [group] = select(doc, SelectionRequest.by_name("foobar"))
    assert _bodies(group) == ["1", "2"]


def test_equivalent_targets_form_one_group():
    doc = _doc(
        _block(body="x=1", tangle="foo.py"),
        _block(body="y=2", tangle="./foo.py"),
        _block(body="z=3", tangle="src/../foo.py"),
    )
    [group] = select(doc, SelectionRequest.all_tangled())
    assert group.target == "foo.py"
    assert _bodies(group) == ["x=1", "y=2", "z=3"]
