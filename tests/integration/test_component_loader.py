"""
Component Loader Tests

Tests for flag detection and script extraction in component documents.
"""

import pytest

from codegraph_tiers.config import TierSettings
from codegraph_tiers.errors import ComponentError, StructuralError
from codegraph_tiers.integration import ComponentLoader, extract_script

SCRIPT = "on: client\nlet x = 1\non: server\nconsole.log(x)\n"

DOCUMENT = f"""<template>
  <div>{{{{ message }}}}</div>
</template>

<script>
{SCRIPT}</script>

<style>
div {{ color: red; }}
</style>
"""


@pytest.fixture
def loader(settings):
    return ComponentLoader(settings)


class TestShouldCompile:
    """Test resource flag detection."""

    @pytest.mark.parametrize(
        "resource_path",
        [
            "src/App.vue?tiers=true",
            "src/App.vue?tiers",
            "src/App.vue?tiers=1",
            "src/App.vue?lang=js&tiers=yes",
            "src/App.VUE?tiers=TRUE",
        ],
    )
    def test_flagged(self, loader, resource_path):
        """Test flagged component resources."""
        assert loader.should_compile(resource_path) is True

    @pytest.mark.parametrize(
        "resource_path",
        [
            "src/App.vue",
            "src/App.vue?tiers=false",
            "src/App.vue?tiers=0",
            "src/App.vue?other=true",
            "src/app.js?tiers=true",
        ],
    )
    def test_not_flagged(self, loader, resource_path):
        """Test resources left alone."""
        assert loader.should_compile(resource_path) is False

    def test_custom_flag_and_extension(self):
        """Test flag name and extensions from settings."""
        settings = TierSettings(_env_file=None, component_flag="split", component_extensions=[".html"])
        loader = ComponentLoader(settings)

        assert loader.should_compile("page.html?split") is True
        assert loader.should_compile("page.vue?split") is False
        assert loader.should_compile("page.html?tiers") is False


class TestLoad:
    """Test loading documents."""

    def test_passthrough(self, loader):
        """Test unflagged documents are returned unchanged."""
        outcome = loader.load(DOCUMENT, "src/App.vue")

        assert outcome.passthrough is True
        assert outcome.document == DOCUMENT
        assert outcome.result is None
        assert outcome.script is None

    def test_passthrough_skips_invalid_script(self, loader):
        """Test unflagged documents are not compiled at all."""
        document = "<script>\nlet x = 1\n</script>\n"

        outcome = loader.load(document, "src/App.vue?tiers=false")

        assert outcome.passthrough is True

    def test_compiled(self, loader):
        """Test flagged documents compile their script."""
        outcome = loader.load(DOCUMENT, "src/App.vue?tiers=true")

        assert outcome.passthrough is False
        assert outcome.document == DOCUMENT
        (fragment,) = outcome.result.server
        assert fragment.input_names == ["x"]
        assert fragment.code.startswith(";const { x } = __tierIn;")

    def test_script_errors_propagate(self, loader):
        """Test compiler errors surface from the loader."""
        document = "<script>\nlet x = 1\n</script>\n"

        with pytest.raises(StructuralError):
            loader.load(document, "src/App.vue?tiers")

    def test_missing_script(self, loader):
        """Test flagged document without a script."""
        with pytest.raises(ComponentError) as exc_info:
            loader.load("<template><div></div></template>\n", "src/Empty.vue?tiers")

        assert exc_info.value.context["resource_path"] == "src/Empty.vue?tiers"


class TestExtractScript:
    """Test script extraction."""

    def test_offsets(self):
        """Test extracted text sits at its byte range."""
        script = extract_script(DOCUMENT)

        assert script.text == "\n" + SCRIPT
        assert DOCUMENT.encode()[script.start:script.end].decode() == script.text

    def test_first_script_wins(self):
        """Test only the first script element is used."""
        document = "<script>\non: server\na()\n</script>\n<script>\nb()\n</script>\n"

        script = extract_script(document)

        assert "a()" in script.text
        assert "b()" not in script.text
