"""Tests for Go output rendering and validation."""

from __future__ import annotations

import pytest

from pylinkgen.bindgen import (
    BindingGenerator,
    BindingValidator,
    Declaration,
    GoModuleWriter,
)
from pylinkgen.core.config import PyLinkGenConfig
from pylinkgen.core.exceptions import OutputWriteError

MATHX_GO = '''package mathx

import (
\t"github.com/goplus/lib/py"
\t_ "unsafe"
)

const LLGoPackage = "py.mathx"

// Add two numbers
//
// See http://x/add
//
//go:linkname Add py.add
func Add(a *py.Object, b *py.Object) *py.Object
'''

ADD = Declaration(
    local_name="Add",
    params=("a", "b"),
    foreign_link_name="add",
    doc=("Add two numbers", "", "See http://x/add"),
    source_url="http://x/add",
)


@pytest.fixture
def writer():
    return GoModuleWriter()


class TestRender:
    def test_mathx(self, writer):
        assert writer.render("mathx", [ADD]) == MATHX_GO

    def test_no_declarations(self, writer):
        text = writer.render("empty", [])
        assert text.endswith('const LLGoPackage = "py.empty"\n')
        assert "//go:linkname" not in text

    def test_undocumented_declaration(self, writer):
        decl = Declaration(local_name="Seed", params=(), foreign_link_name="seed")
        text = writer.render("rnd", [decl])
        assert text.endswith(
            '"py.rnd"\n\n//go:linkname Seed py.seed\nfunc Seed() *py.Object\n'
        )

    def test_variadic(self, writer):
        decl = Declaration(local_name="Concat", params=("sep",), foreign_link_name="concat", variadic=True)
        text = writer.render("m", [decl])
        assert "func Concat(sep *py.Object, __llgo_va_list ...*py.Object) *py.Object\n" in text

    def test_variadic_only(self, writer):
        decl = Declaration(local_name="Max", params=(), foreign_link_name="max", variadic=True)
        assert "func Max(__llgo_va_list ...*py.Object) *py.Object" in writer.render("m", [decl])

    def test_dotted_module(self, writer):
        text = writer.render("os.path", [])
        assert text.startswith("package path\n")
        assert 'const LLGoPackage = "py.os.path"' in text

    def test_doc_lines_become_comments(self, writer):
        decl = Declaration(local_name="F", params=(), foreign_link_name="f",
                           doc=("first", "    indented", "trailing   "))
        text = writer.render("m", [decl])
        assert "// first\n//     indented\n// trailing\n//\n//go:linkname F py.f\n" in text

    def test_custom_runtime(self):
        writer = GoModuleWriter(runtime_import="example.com/rt/pyrt", handle_type="Ref", link_prefix="pyrt.")
        text = writer.render("m", [Declaration(local_name="F", params=("x",), foreign_link_name="f")])
        assert '\t"example.com/rt/pyrt"\n' in text
        assert "//go:linkname F pyrt.f\nfunc F(x *pyrt.Ref) *pyrt.Ref\n" in text

    def test_repeated_render_is_identical(self, writer):
        assert writer.render("mathx", [ADD]) == writer.render("mathx", [ADD])


class TestWrite:
    def test_writes_module_file(self, writer, tmp_path):
        out = tmp_path / "bindings" / "mathx"
        path = writer.write("mathx", [ADD], out)
        assert path == out / "mathx.go"
        assert path.read_bytes() == MATHX_GO.encode("utf-8")

    def test_overwrite_is_byte_identical(self, writer, tmp_path):
        first = writer.write("mathx", [ADD], tmp_path).read_bytes()
        second = writer.write("mathx", [ADD], tmp_path).read_bytes()
        assert first == second

    def test_unwritable_directory(self, writer, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        with pytest.raises(OutputWriteError):
            writer.write("mathx", [ADD], blocker / "sub")


class TestValidator:
    def test_rendered_output_is_valid(self, writer):
        result = BindingValidator().validate_text(writer.render("mathx", [ADD]), "mathx", [ADD])
        assert result.is_valid
        assert result.generated_count == 1
        assert result.warnings == []
        assert result.summary.startswith("[OK] Valid")

    def test_missing_declaration(self, writer):
        other = Declaration(local_name="Sub", params=("a",), foreign_link_name="sub")
        result = BindingValidator().validate_text(writer.render("mathx", [ADD]), "mathx", [ADD, other])
        assert not result.is_valid
        assert result.missing == ["Sub"]

    def test_orphan_linkname(self):
        text = (
            'package m\n\nconst LLGoPackage = "py.m"\n\n'
            '//go:linkname Add py.add\nvar x = 1\n'
        )
        result = BindingValidator().validate_text(text, "m", [])
        assert not result.is_valid
        assert any("Add" in w for w in result.warnings)

    def test_wrong_package_link(self, writer):
        result = BindingValidator().validate_text(writer.render("mathx", [ADD]), "other", [ADD])
        assert any("package link" in w for w in result.warnings)

    def test_collisions_are_warnings(self, writer):
        decls = [
            Declaration(local_name="FooBar", params=(), foreign_link_name="foo_bar"),
            Declaration(local_name="FooBar", params=(), foreign_link_name="fooBar"),
        ]
        result = BindingValidator().validate_text(writer.render("m", decls), "m", decls)
        assert result.collisions == ["FooBar"]
        assert any("foo_bar, fooBar" in w for w in result.warnings)

    def test_missing_file(self, tmp_path):
        result = BindingValidator().validate_file(tmp_path / "none.go", "m", [ADD])
        assert not result.is_valid
        assert result.missing == ["Add"]


class TestGenerator:
    def test_generate_end_to_end(self, fake_source, mathx_dump, tmp_path):
        generator = BindingGenerator(config=PyLinkGenConfig(), source=fake_source(mathx_dump))
        result = generator.generate("mathx", tmp_path / "out")

        assert result['success']
        assert result['output_file'] == str(tmp_path / "out" / "mathx.go")
        assert (tmp_path / "out" / "mathx.go").read_text(encoding="utf-8") == MATHX_GO
        assert result['validation']['valid']
        assert result['summary']['declarations'] == 1
        assert result['warnings'] == []

    def test_default_output_directory(self, fake_source, mathx_dump, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        generator = BindingGenerator(config=PyLinkGenConfig(), source=fake_source(mathx_dump))
        generator.generate("mathx")
        assert (tmp_path / "mathx" / "mathx.go").is_file()

    def test_blank_output_directory_uses_default(self, fake_source, mathx_dump):
        generator = BindingGenerator(config=PyLinkGenConfig(), source=fake_source(mathx_dump))
        assert str(generator.resolve_output_dir("mathx", "  ")) == "mathx"

    def test_unresolved_names_reported(self, fake_source, mixed_dump, tmp_path):
        generator = BindingGenerator(config=PyLinkGenConfig(), source=fake_source(mixed_dump))
        result = generator.generate("mixed", tmp_path)
        assert result['summary']['unresolved'] == ["clip", "where"]
        assert any("clip, where" in w for w in result['warnings'])

    def test_idempotent_runs(self, fake_source, mixed_dump, tmp_path):
        generator = BindingGenerator(config=PyLinkGenConfig(), source=fake_source(mixed_dump))
        first = generator.generate("mixed", tmp_path / "a")
        second = generator.generate("mixed", tmp_path / "b")
        with open(first['output_file'], 'rb') as a, open(second['output_file'], 'rb') as b:
            assert a.read() == b.read()
