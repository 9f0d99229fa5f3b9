"""Tests for the Jinja2 template engine wrapper."""

import pytest

from scene_codegen.core.templates import TemplateError, create_template_engine


@pytest.fixture
def template_dir(tmp_path):
    """Directory with a single plain-text template."""
    (tmp_path / "block.txt").write_text("begin\n{{ body | indent_with('  ', 2) }}\nend", encoding="utf-8")
    return tmp_path


class TestTemplateEngine:
    """Tests for rendering templates from a directory."""

    def test_indent_filter(self, template_dir):
        """Test non-empty lines are indented and blank lines kept."""
        engine = create_template_engine(template_dir)
        rendered = engine.render_template("block.txt", {"body": "a\n\nb"})
        assert rendered == "begin\n    a\n\n    b\nend"

    def test_missing_variable(self, template_dir):
        """Test undefined variables raise TemplateError."""
        with pytest.raises(TemplateError, match="block.txt"):
            create_template_engine(template_dir).render_template("block.txt", {})

    def test_missing_template(self, template_dir):
        """Test unknown templates raise TemplateError."""
        with pytest.raises(TemplateError):
            create_template_engine(template_dir).render_template("nope.txt", {})

    def test_without_directory(self, tmp_path):
        """Test an engine without templates on disk still fails cleanly."""
        engine = create_template_engine(tmp_path / "missing")
        with pytest.raises(TemplateError):
            engine.render_template("block.txt", {"body": ""})
