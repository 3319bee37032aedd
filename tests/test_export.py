import os

import pytest

from data_model import SelectionRequest, UnterminatedBlock
from exorg.commands.tangle import write_files
from org_parser import parse_document
from router import export_document, export_parsed

SCENARIO = """\
* Setup
#+BEGIN_SRC python :tangle foo.py
x=1
#+END_SRC

Some prose in between.

#+BEGIN_SRC python :tangle foo.py
y=2
#+END_SRC
"""


def test_blocks_with_the_same_target_are_blank_line_joined(write):
    doc = write("doc.org", SCENARIO)
    result = export_document(doc, SelectionRequest.all_tangled())
    assert len(result.groups) == 1
    assert result.files == {"foo.py": "x=1\n\ny=2"}


def test_cross_file_fragments_follow_expanded_order(write):
    write("lib.org", "#+BEGIN_SRC c :tangle out.c\nb\n#+END_SRC\n")
    doc = write(
        "main.org",
        "#+BEGIN_SRC c :tangle out.c\na\n#+END_SRC\n"
        "#+INCLUDE: lib.org\n"
        "#+BEGIN_SRC c :tangle out.c\nc\n#+END_SRC\n",
    )
    result = export_document(doc, SelectionRequest.all_tangled())
    assert result.files == {"out.c": "a\n\nb\n\nc"}


def test_tangled_files_round_trip(write, tmp_path):
    text = (
        "#+BEGIN_SRC python :tangle pkg/app.py\n"
        "def main():\n"
        "\treturn 'tab'  \n"
        "\n"
        "#+END_SRC\n"
        "#+BEGIN_SRC rust :tangle yes\n"
        "fn main() {}\n"
        "#+END_SRC\n"
        "#+BEGIN_SRC python :tangle ./pkg/app.py\n"
        "main()\n"
        "#+END_SRC\n"
    )
    doc = write("notes.org", text)
    out_dir = tmp_path / "out"
    result = export_document(doc, SelectionRequest.all_tangled())
    write_files(result.files, out_dir)

    # expected content computed independently from a fresh parse of the source
    expected: dict[str, list[str]] = {}
    for block in parse_document(text).blocks:
        name = block.tangle_target or "notes.rs"
        expected.setdefault(os.path.normpath(name), []).append(block.text)

    produced = {
        p.relative_to(out_dir).as_posix(): p.read_text(encoding="utf-8")
        for p in out_dir.rglob("*") if p.is_file()
    }
    assert produced == {
        name: "\n\n".join(texts) + "\n" for name, texts in expected.items()
    }


def test_equivalent_targets_are_written_once(write, tmp_path):
    doc = write(
        "doc.org",
        "#+BEGIN_SRC python :tangle foo.py\nx=1\n#+END_SRC\n"
        "#+BEGIN_SRC python :tangle ./foo.py\ny=2\n#+END_SRC\n",
    )
    result = export_document(doc, SelectionRequest.all_tangled())
    assert result.files == {"foo.py": "x=1\n\ny=2"}

    write_files(result.files, tmp_path / "out")
    assert (tmp_path / "out" / "foo.py").read_text(encoding="utf-8") == "x=1\n\ny=2\n"


def test_by_language_uses_the_document_stem(write):
    doc = write("notes.v2.org", "#+BEGIN_SRC python\na\n#+END_SRC\n#+BEGIN_SRC python\nb\n#+END_SRC\n")
    result = export_document(doc, SelectionRequest.by_language("python"))
    assert result.files == {"notes.py": "a\n\nb"}


def test_by_name_with_explicit_output(write):
    doc = write(
        "notes.org",
        "#+NAME: setup\n#+BEGIN_SRC sh\necho hi\n#+END_SRC\n",
    )
    result = export_document(doc, SelectionRequest.by_name("se", explicit_output="run.sh"))
    assert result.files == {"run.sh": "echo hi"}


def test_custom_language_declaration(write):
    doc = write(
        "notes.org",
        "#+SRC_LANG: nim nim\n#+BEGIN_SRC nim :tangle yes\necho 1\n#+END_SRC\n",
    )
    result = export_document(doc, SelectionRequest.all_tangled())
    assert result.files == {"notes.nim": "echo 1"}


def test_errors_are_raised_not_swallowed(write):
    write("lib.org", "#+BEGIN_SRC python\nx = 1\n")
    doc = write("main.org", "#+INCLUDE: lib.org\n")
    with pytest.raises(UnterminatedBlock):
        export_document(doc, SelectionRequest.all_tangled())


def test_export_parsed_document():
    doc = parse_document(SCENARIO, "scenario.org")
    result = export_parsed(doc, SelectionRequest.by_language("python"))
    assert result.files == {"scenario.py": "x=1\n\ny=2"}
    assert result.warnings == ()
