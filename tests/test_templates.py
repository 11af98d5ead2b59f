import pytest

from docsmith.templates import TEMPLATE_REGISTRY, get_template_module, list_template_modules, populate
from docsmith.templates.base import PLACEHOLDER


@pytest.fixture
def resignation():
    return get_template_module("resignation-letter")


def test_registry_contents():
    assert sorted(TEMPLATE_REGISTRY) == ["leave-application", "resignation-letter"]
    assert [m.slug for m in list_template_modules()] == ["leave-application", "resignation-letter"]


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        TEMPLATE_REGISTRY["new"] = get_template_module("resignation-letter")


def test_unknown_slug():
    assert get_template_module("nda") is None


@pytest.mark.parametrize("module", list_template_modules(), ids=lambda m: m.slug)
def test_every_theme_uses_only_declared_fields(module):
    assert len(module.themes) == 4
    for template in module.themes.values():
        assert set(PLACEHOLDER.findall(template)) <= set(module.fields)


@pytest.mark.parametrize("module", list_template_modules(), ids=lambda m: m.slug)
def test_generate_replaces_every_placeholder(module):
    values = {name: f"value-of-{name}" for name in module.fields}
    for theme, html in module.generate(values).items():
        assert "{{" not in html, theme
        for name in module.fields:
            if "{{" + name + "}}" in module.themes[theme]:
                assert f"value-of-{name}" in html


def test_generate_missing_fields_become_empty(resignation):
    html = resignation.generate({"authorName": "Ada"})["classic"]
    assert "Ada" in html
    assert "{{" not in html
    assert "None" not in html


def test_generate_with_no_values(resignation):
    generated = resignation.generate(None)
    assert set(generated) == {"classic", "modern", "minimal", "traditional"}


@pytest.mark.parametrize("theme", ["classic", "modern", "minimal", "traditional"])
def test_values_are_substituted_literally(resignation, theme):
    values = {
        "authorName": "Conor O'Brien",
        "companyName": "Smith & Sons",
        "resignationReason": "Pay < market rate",
        "signature": r"C:\sig\1.png",
    }
    html = resignation.generate(values)[theme]
    for name, value in values.items():
        if "{{" + name + "}}" in resignation.themes[theme]:
            assert value in html
    assert "&#x27;" not in html
    assert "&amp;" not in html


def test_missing_fields(resignation):
    values = {name: "x" for name in resignation.fields}
    values["companyName"] = ""
    del values["signature"]
    assert resignation.missing_fields(values) == ["companyName", "signature"]


def test_raw_templates_are_copies(resignation):
    raw = resignation.raw_templates()
    raw["classic"] = "changed"
    assert resignation.themes["classic"] != "changed"
    assert "{{authorName}}" in resignation.raw_templates()["classic"]


def test_populate():
    assert populate("Dear {{name}}, {{missing}}re: {{topic}}", {"name": "Ada", "topic": "Leave"}) == (
        "Dear Ada, re: Leave"
    )
