import pytest

from data_model import (
    Block,
    ErrorCode,
    FilenameInferenceFailure,
    Fragment,
    Origin,
    OutputGroup,
    SelectionRequest,
)
from router import (
    EXTENSIONS,
    UNKNOWN,
    assemble,
    extension_for,
    normalize_target,
    output_filename,
)

EXPECTED_EXTENSIONS = {
    "awk": ".awk",
    "bash": ".sh",
    "sh": ".sh",
    "shell": ".sh",
    "c": ".c",
    "cpp": ".cpp",
    "c++": ".cpp",
    "csharp": ".cs",
    "c#": ".cs",
    "cs": ".cs",
    "css": ".css",
    "d": ".d",
    "emacs-lisp": ".el",
    "elisp": ".el",
    "go": ".go",
    "html": ".html",
    "java": ".java",
    "javascript": ".js",
    "js": ".js",
    "json": ".json",
    "julia": ".jl",
    "latex": ".tex",
    "lua": ".lua",
    "markdown": ".md",
    "ocaml": ".ml",
    "perl": ".pl",
    "php": ".php",
    "prolog": ".pl",
    "python": ".py",
    "r": ".r",
    "ruby": ".rb",
    "rust": ".rs",
    "sql": ".sql",
    "toml": ".toml",
    "yaml": ".yml",
}

ALL = SelectionRequest.all_tangled()


def _frag(text, position, lang="python", target=None):
    block = Block(
        name=None,
        language=lang,
        tangle_target=target,
        content=tuple(text.split("\n")),
        origin=Origin("notes.org", position + 1),
    )
    return Fragment(block, position)


def _group(*frags, target=None, lang="python", output_name=None):
    return OutputGroup(target=target, language=lang, output_name=output_name, fragments=list(frags))


# ---------------------------------------------------------------------------
# Extension table
# ---------------------------------------------------------------------------

def test_extension_table_is_exactly_known():
    assert dict(EXTENSIONS) == EXPECTED_EXTENSIONS


@pytest.mark.parametrize("language, ext", sorted(EXPECTED_EXTENSIONS.items()))
def test_every_language_resolves(language, ext):
    assert extension_for(language) == ext
    assert ext.startswith(".")


def test_extension_table_is_read_only():
    with pytest.raises(TypeError):
        EXTENSIONS["nim"] = ".nim"  # type: ignore[index]


def test_unknown_language_gives_sentinel():
    assert extension_for("brainfuck") == UNKNOWN
    assert extension_for(None) == UNKNOWN
    assert extension_for("") == UNKNOWN


def test_lookup_ignores_case():
    assert extension_for("Python") == ".py"


def test_declared_languages_override_table():
    assert extension_for("nim", [("nim", "nim")]) == ".nim"
    assert extension_for("python", [("python", "pyw")]) == ".pyw"


def test_declared_languages_ignore_case():
    assert extension_for("nim", [("Nim", "nim")]) == ".nim"
    assert extension_for("NIM", [("nim", ".nim")]) == ".nim"


# ---------------------------------------------------------------------------
# Filenames
# ---------------------------------------------------------------------------

def test_explicit_output_wins_for_single_group():
    req = SelectionRequest.by_language("python", explicit_output="out/x.txt")
    group = _group(_frag("a", 0), target="t.py")
    assert output_filename(group, req, stem="notes", single=True) == "out/x.txt"
    assert output_filename(group, req, stem="notes", single=False) == "t.py"


def test_target_beats_inferred_name():
    assert output_filename(_group(target="lib/x.py"), ALL, stem="notes") == "lib/x.py"


def test_name_inferred_from_stem_and_language():
    assert output_filename(_group(lang="rust"), ALL, stem="notes") == "notes.rs"


def test_output_name_overrides_stem():
    req = SelectionRequest.all_tangled(output_name="app")
    assert output_filename(_group(), req, stem="notes") == "app.py"
    assert output_filename(_group(output_name="tool"), ALL, stem="notes") == "tool.py"
    assert output_filename(_group(output_name="tool.pyw"), ALL, stem="notes") == "tool.pyw"


def test_unknown_language_needs_a_name():
    with pytest.raises(FilenameInferenceFailure) as exc:
        output_filename(_group(lang="brainfuck"), ALL, stem="notes")
    assert exc.value.code == ErrorCode.FILENAME_INFERENCE_FAILURE
    assert exc.value.language == "brainfuck"

    req = SelectionRequest.all_tangled(output_name="prog.bf")
    assert output_filename(_group(lang="brainfuck"), req, stem="notes") == "prog.bf"


def test_declared_suffix_used_for_inferred_name():
    name = output_filename(_group(lang="nim"), ALL, stem="notes", declared=[("nim", "nim")])
    assert name == "notes.nim"


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------

def test_fragments_are_joined_by_one_blank_line():
    files = assemble([_group(_frag("x=1", 0), _frag("y=2", 3), target="foo.py")], ALL, stem="n")
    assert files == {"foo.py": "x=1\n\ny=2"}


def test_groups_with_the_same_filename_are_merged_by_position():
    explicit = _group(_frag("a", 0), _frag("c", 2), target="notes.py")
    inferred = _group(_frag("b", 1))
    files = assemble([explicit, inferred], ALL, stem="notes")
    assert files == {"notes.py": "a\n\nb\n\nc"}


def test_result_keeps_group_order():
    groups = [_group(_frag("1", 0), target="z.py"), _group(_frag("2", 1), target="a.py")]
    assert list(assemble(groups, ALL, stem="n")) == ["z.py", "a.py"]


def test_multi_line_content_is_preserved():
    files = assemble([_group(_frag("def f():\n\treturn 1\r", 0), target="f.py")], ALL, stem="n")
    assert files["f.py"] == "def f():\n\treturn 1\r"


def test_equivalent_paths_are_merged_into_one_file():
    dotted = _group(_frag("a", 0), target="./notes.py")
    inferred = _group(_frag("b", 1))
    nested = _group(_frag("c", 2), target="lib/../notes.py")
    files = assemble([dotted, inferred, nested], ALL, stem="notes")
    assert files == {"notes.py": "a\n\nb\n\nc"}


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("foo.py", "foo.py"),
        ("./foo.py", "foo.py"),
        ("src//app/../foo.py", "src/foo.py"),
    ],
)
def test_normalize_target(raw, expected):
    assert normalize_target(raw) == expected
