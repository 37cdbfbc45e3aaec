import json
import re

from schemesync.builder import TokenConfig, build, build_language_configs
from schemesync.editor import (
    ColorUsage, annotate_markup, build_color_index, css_token_name, generate_editor, palette_markup,
    preview_theme, render_previews, write_editor,
)
from schemesync.extractor import extract_palette
from schemesync.mapping import Language


def editor_data(page):
    match = re.search(r'const EDITOR_DATA = (.*);\n', page)
    return json.loads(match.group(1))


def test_css_token_name_keeps_alphanumerics():
    assert css_token_name("DEFAULT_KEYWORD") == "DEFAULT_5f_KEYWORD"
    assert css_token_name("CSS.CLASS_NAME") == "CSS_2e_CLASS_5f_NAME"


def test_css_token_name_is_injective():
    keys = ["A.B", "A_B", "AxB", "A_2e_B", "A-B"]
    assert len({css_token_name(key) for key in keys}) == len(keys)


def test_preview_theme_points_rules_at_variables(scheme_xml):
    theme = build(scheme_xml)
    preview = preview_theme(theme)
    assert preview.token_rules[0].foreground == f"var(--token-{css_token_name(theme.token_rules[0].key)})"
    assert preview.colors == theme.colors
    assert theme.token_rules[0].foreground.startswith("#")


def test_annotate_markup():
    markup = ('<span style="color: var(--token-K_2e_1); font-weight: bold">a</span>'
              '<span style="color: #FFFFFF">b</span>'
              '<span style="color: var(--token-unknown)">c</span>')
    annotated = annotate_markup(markup, {"K_2e_1": "K.1"})
    assert annotated.startswith('<span data-token="K.1" style="color: var(--token-K_2e_1); font-weight: bold">a')
    assert '<span style="color: #FFFFFF">b' in annotated
    assert '<span style="color: var(--token-unknown)">c' in annotated


def test_color_index_groups_usages_in_order():
    configs = {
        "General": {"A": TokenConfig("Alpha", "", "#aabbcc"), "B": TokenConfig("Beta", "", "#112233")},
        "SQL": {"C": TokenConfig("Gamma", "", "#AABBCC")},
    }
    index = build_color_index(configs)
    assert index == {
        "#AABBCC": [ColorUsage("General", "A", "Alpha"), ColorUsage("SQL", "C", "Gamma")],
        "#112233": [ColorUsage("General", "B", "Beta")],
    }
    assert index["#AABBCC"][1].full_label == "SQL: Gamma"
    assert index["#AABBCC"][0].full_label == "Alpha"


def test_palette_sorted_by_usage():
    index = {
        "#111111": [ColorUsage("General", "A", "Alpha")],
        "#222222": [ColorUsage("General", "B", "Beta"), ColorUsage("SQL", "C", "Gamma")],
    }
    markup = palette_markup(index)
    assert markup.index("#222222") < markup.index("#111111")
    assert "2 tokens" in markup


def test_render_previews_with_custom_renderer(scheme_xml):
    theme = build(scheme_xml)
    calls = []

    def render(preview, language_id, source):
        calls.append(language_id)
        rule = preview.token_rules[0]
        return f'<span style="color: {rule.foreground}">{source}</span>'

    languages = [Language('one', 'One', 'General', 'text', ''), Language('two', 'Two', 'General', 'text', '')]
    previews = render_previews(theme, {'one': 'x'}, languages, render)
    assert calls == ['one']
    assert previews['one'] == f'<span data-token="{theme.token_rules[0].key}" style="color: var(--token-' \
                              f'{css_token_name(theme.token_rules[0].key)})">x</span>'


def test_generate_editor(scheme_xml):
    theme = build(scheme_xml)
    configs = build_language_configs(scheme_xml)
    page = generate_editor(theme, configs, extract_palette(scheme_xml))

    assert page.startswith("<!DOCTYPE html>")
    assert "Cyan Harbor - Theme Editor" in page
    assert f"--token-{css_token_name('DEFAULT_KEYWORD')}: #C792EA;" in page
    assert 'data-token="DEFAULT_KEYWORD"' in page
    assert 'data-preview="palette"' in page
    assert '<option value="SQL">SQL</option>' in page
    assert '<option value="General">' not in page

    data = editor_data(page)
    assert data["saveUrl"] == "/save"
    assert data["languageConfigs"]["General"]["DEFAULT_KEYWORD"]["fontStyle"] == "bold"
    assert data["cssNames"]["CSS.CLASS_NAME"] == "CSS_2e_CLASS_5f_NAME"
    assert "colorUsage" not in data
    assert data["languageConfigs"]["SQL"]["SQL_KEYWORD"]["fallback"] == "DEFAULT_KEYWORD"
    assert "colorUsage(state, color.toUpperCase())" in page
    assert data["groups"][0] == "General"


def test_generate_editor_escapes_script_data():
    configs = {"General": {"K": TokenConfig("</script><b>", "", "#000000")}}
    theme = build('<option name="K"><value><option name="FOREGROUND" value="000000" /></value></option>')
    page = generate_editor(theme, configs, [], samples={}, render=lambda *args: "")
    assert "</script><b>" not in page


def test_write_editor(tmp_path, scheme_xml):
    theme = build(scheme_xml)
    path = write_editor(tmp_path / "out" / "theme-editor.html", theme, build_language_configs(scheme_xml), [],
                        samples={}, render=lambda *args: "")
    assert path.read_text(encoding="utf-8").startswith("<!DOCTYPE html>")
