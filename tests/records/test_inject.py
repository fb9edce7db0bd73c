"""Tests for recordkit.records.inject - ${name} substitution."""

import pytest

from recordkit.core.errors import TemplateError, VariableNotFoundError
from recordkit.records.inject import inject_variables


class TestInjectVariables:
    def test_single_placeholder(self):
        assert inject_variables("Hello ${name}!", {"name": "Earth"}) == "Hello Earth!"

    def test_multiple_placeholders(self):
        template = "${scheme}://${host}:${port}/"
        variables = {"scheme": "https", "host": "example.org", "port": 8443}
        assert inject_variables(template, variables) == "https://example.org:8443/"

    def test_values_rendered_with_sprint(self):
        variables = {"flag": True, "ratio": 0.5, "items": [1, 2]}
        assert inject_variables("${flag} ${ratio} ${items}", variables) == "true 0.5 [1,2]"

    def test_whole_template_returns_raw_value(self):
        assert inject_variables("hosts", {"hosts": ["a", "b"]}) == ["a", "b"]

    def test_dollar_without_brace_is_literal(self):
        assert inject_variables("cost: $5 ${unit}", {"unit": "USD"}) == "cost: $5 USD"

    def test_brace_without_dollar_is_literal(self):
        assert inject_variables("{x} ${x}", {"x": "1"}) == "{x} 1"

    def test_unterminated_placeholder_dropped(self):
        assert inject_variables("a ${b} ${c", {"b": "B"}) == "a B "


class TestMissingVariables:
    def test_missing_placeholder(self):
        with pytest.raises(VariableNotFoundError) as exc_info:
            inject_variables("Hello ${name}", {})
        assert exc_info.value.name == "name"
        assert str(exc_info.value) == "input variable (name) not found"

    def test_missing_whole_template(self):
        with pytest.raises(VariableNotFoundError):
            inject_variables("plain text", {"other": 1})

    def test_is_a_template_error(self):
        with pytest.raises(TemplateError):
            inject_variables("${x}", {})
