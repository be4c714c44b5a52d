"""Tests for README rendering."""

import pytest

from repover.utils.readme import README_TEMPLATE, render_readme


@pytest.mark.unit
class TestRenderReadme:
    """Tests for render_readme."""

    def test_substitutes_placeholders(self) -> None:
        text = render_readme("vendor/pkg", "Does things")
        assert text.startswith("# vendor/pkg\n\nDoes things\n")
        assert "'sample' => 'vendor/pkg::hooks.sample'" in text
        assert "{{" not in text

    def test_template_sections(self) -> None:
        for heading in ("## Documentation", "## Changelog", "## Support", "## Hooks"):
            assert heading in README_TEMPLATE

    def test_custom_template(self) -> None:
        assert render_readme("a", "b", template="{{name}}: {{description}}") == "a: b"
