"""
Interactive theme editor page.

The page shows every sample rendered with the theme, a color picker and bold/italic
toggles per mapped attribute, and a palette of all colors in use. Rendered spans are
tied back to attribute keys through CSS variables (`--token-<name>`) and a
`data-token` attribute, so one change recolors every occurrence in every sample.
Saving posts the edited configs to the editor server, which writes them into the
scheme XML.
"""
import html
import json
import logging
import re
from pathlib import Path
from typing import NamedTuple

from . import renderer
from .builder import ThemeDocument, TokenRule
from .mapping import LANGUAGES
from .samples import SAMPLES

logger = logging.getLogger(__name__)

TOKEN_SPAN_PATTERN = (
    r'<span (?P<attrs>[^>]*?)style="(?P<style>[^"]*?\bcolor:\s*var\(--token-(?P<name>[A-Za-z0-9_]+)\)[^"]*)"'
)


class ColorUsage(NamedTuple):
    language: str
    key: str
    label: str

    @property
    def full_label(self) -> str:
        return self.label if self.language == 'General' else f"{self.language}: {self.label}"


def css_token_name(key: str) -> str:
    """
    CSS-safe name for an attribute key. Letters and digits are kept, anything else
    becomes _<hex>_, so distinct keys never share a name.
    """
    return re.sub(r'[^A-Za-z0-9]', lambda m: f"_{ord(m.group()):x}_", key)


def preview_theme(theme: ThemeDocument) -> ThemeDocument:
    """Copy of the theme whose rule colors point at per-attribute CSS variables."""
    rules = [
        TokenRule(rule.label, rule.scopes, f"var(--token-{css_token_name(rule.key)})", rule.style, rule.key)
        if rule.key else rule
        for rule in theme.token_rules
    ]
    return ThemeDocument(theme.name, theme.type, dict(theme.colors), rules)


def annotate_markup(markup: str, keys_by_name: dict) -> str:
    """Adds data-token="<attribute key>" to every span colored by a token variable."""
    def replacer(match):
        key = keys_by_name.get(match.group('name'))
        if key is None:
            return match.group(0)
        return f'<span data-token="{html.escape(key)}" {match.group("attrs")}style="{match.group("style")}"'

    return re.sub(TOKEN_SPAN_PATTERN, replacer, markup)


def build_color_index(language_configs: dict) -> dict:
    """
    Maps each display color to the attributes using it, in table order:
    {"#AABBCC": [ColorUsage, ...]}
    """
    index = {}
    for language, configs in language_configs.items():
        for key, config in configs.items():
            index.setdefault(config.foreground.upper(), []).append(ColorUsage(language, key, config.label))
    return index


def render_previews(theme: ThemeDocument, samples=SAMPLES, languages=LANGUAGES, render=renderer.render) -> dict:
    preview = preview_theme(theme)
    keys_by_name = {css_token_name(rule.key): rule.key for rule in theme.token_rules if rule.key}
    previews = {}
    for language in languages:
        if language.id not in samples:
            continue
        logger.info("Generating preview for %s", language.id)
        markup = render(preview, language.id, samples[language.id])
        previews[language.id] = annotate_markup(markup, keys_by_name)
    return previews


def palette_markup(color_index: dict) -> str:
    colors = sorted(color_index, key=lambda color: len(color_index[color]), reverse=True)
    cards = []
    for color in colors:
        usages = color_index[color]
        items = "".join(
            f'<div class="palette-usage-item" title="{html.escape(u.full_label)} ({html.escape(u.key)})">'
            f'<span class="usage-lang-tag">{html.escape(u.language)}</span>'
            f'<span class="usage-label">{html.escape(u.label)}</span></div>'
            for u in usages
        )
        cards.append(f"""
      <div class="palette-card">
        <div class="palette-swatch" style="background-color: {color}"></div>
        <div class="palette-info">
          <div class="palette-hex">{color}</div>
          <div class="palette-usage-count">{len(usages)} tokens</div>
          <div class="palette-usage-list">{items}</div>
        </div>
      </div>""")
    grid = "".join(cards)
    return f"""
    <div class="palette-container">
      <div class="palette-header">
        <h2 class="palette-title">Theme Color Palette</h2>
        <p class="palette-desc">Every color used by the current theme and the tokens using it.</p>
      </div>
      <div class="palette-grid">{grid}
      </div>
    </div>"""


def _script_json(data) -> str:
    return json.dumps(data).replace("</", "<\\/")


def generate_editor(theme: ThemeDocument, language_configs: dict, palette: list, samples=SAMPLES,
                    languages=LANGUAGES, render=renderer.render, save_url='/save') -> str:
    languages = [language for language in languages if language.id in samples]
    previews = render_previews(theme, samples, languages, render)
    color_index = build_color_index(language_configs)

    logger.info("%d unique colors, %d used by more than one token",
                len(color_index), len([u for u in color_index.values() if len(u) > 1]))

    groups = list(language_configs)
    css_names = {}
    css_variables = []
    for configs in language_configs.values():
        for key, config in configs.items():
            css_names[key] = css_token_name(key)
            css_variables.append(f"      --token-{css_names[key]}: {config.foreground};")

    data = {
        'allColors': palette,
        'languageConfigs': {
            group: {key: config.to_dict() for key, config in configs.items()}
            for group, configs in language_configs.items()
        },
        'cssNames': css_names,
        'groups': groups,
        'languages': [{'id': language.id, 'label': language.label, 'group': language.group} for language in languages],
        'saveUrl': save_url,
    }

    options = "".join(
        f'<option value="{html.escape(group)}">{html.escape(group)}</option>'
        for group in groups if group != 'General'
    )
    tabs = "".join(
        f'<button class="preview-tab{" active" if i == 0 else ""}" data-preview="{lang.id}">{html.escape(lang.label)}</button>'
        for i, lang in enumerate(languages)
    )
    panes = "".join(
        f'<div class="preview-pane" data-preview="{lang.id}" style="display: {"block" if i == 0 else "none"}">'
        f'{previews[lang.id]}</div>'
        for i, lang in enumerate(languages)
    )
    title = html.escape(theme.name)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{title} - Interactive Theme Editor</title>
  <style>
    :root {{
{chr(10).join(css_variables)}
    }}
{EDITOR_CSS}
  </style>
</head>
<body>
  <div class="header">
    <h1>{title} - Theme Editor</h1>
    <div class="header-actions">
      <button class="btn" id="resetButton">Reset</button>
      <button class="btn btn-primary" id="saveButton">Save to XML</button>
    </div>
  </div>
  <div class="main-container">
    <div class="config-panel">
      <div class="lang-selector">
        <label for="languageSelect">Select Language:</label>
        <select id="languageSelect">{options}</select>
      </div>
      <div id="configList"></div>
    </div>
    <div class="preview-panel">
      <div class="preview-tabs">{tabs}<button class="preview-tab" data-preview="palette">Palette</button></div>
      <div class="preview-content">{panes}
        <div class="preview-pane" data-preview="palette" style="display: none">{palette_markup(color_index)}</div>
      </div>
    </div>
  </div>
  <script>
    const EDITOR_DATA = {_script_json(data)};
  </script>
  <script>
{EDITOR_SCRIPT}
  </script>
</body>
</html>
"""


def write_editor(path, theme: ThemeDocument, language_configs: dict, palette: list, **kwargs) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    page = generate_editor(theme, language_configs, palette, **kwargs)
    path.write_text(page, encoding='utf-8')
    return path


EDITOR_CSS = """
    * { margin: 0; padding: 0; box-sizing: border-box; }

    body {
      font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
      background: #1a1f24;
      color: #e0e0e0;
      height: 100vh;
      display: flex;
      flex-direction: column;
    }

    .header {
      background: linear-gradient(135deg, #009688, #00695c);
      padding: 12px 24px;
      display: flex;
      align-items: center;
      justify-content: space-between;
      min-height: 48px;
    }
    .header h1 { color: white; font-size: 1.2em; font-weight: 600; }
    .header-actions { display: flex; gap: 12px; }

    .btn {
      background: rgba(255, 255, 255, 0.1);
      border: 1px solid rgba(255, 255, 255, 0.2);
      color: white;
      padding: 6px 16px;
      border-radius: 4px;
      cursor: pointer;
      font-size: 13px;
    }
    .btn:hover { background: rgba(255, 255, 255, 0.2); }
    .btn-primary { background: white; color: #009688; }
    .btn:disabled { opacity: 0.6; cursor: wait; }

    .main-container { display: grid; grid-template-columns: 350px 1fr; flex: 1; overflow: hidden; }

    .config-panel { background: #2e3c43; border-right: 1px solid #37474f; overflow-y: auto; padding: 20px; }
    .lang-selector { margin-bottom: 20px; }
    .lang-selector label { display: block; font-size: 0.85em; color: #80cbc4; margin-bottom: 8px; }
    .lang-selector select {
      width: 100%;
      background: #263238;
      color: #d9e6e6;
      border: 1px solid #009688;
      padding: 8px 12px;
      border-radius: 6px;
    }

    .config-section { margin-bottom: 25px; }
    .config-section h3, .config-section-collapsible summary {
      font-size: 0.85em;
      text-transform: uppercase;
      letter-spacing: 1px;
      color: #009688;
      margin-bottom: 16px;
      padding-bottom: 8px;
      border-bottom: 1px solid #37474f;
      cursor: pointer;
    }
    .config-section-collapsible { margin-bottom: 24px; }

    .config-item { margin-bottom: 16px; background: #263238; padding: 12px; border-radius: 6px; border: 1px solid #37474f; }
    .config-item-label { font-size: 0.85em; color: #b8c5d0; font-weight: 500; margin-bottom: 4px; }
    .config-item-desc { font-size: 0.75em; color: #607d8b; margin-bottom: 8px; }
    .config-controls { display: flex; gap: 8px; align-items: center; }
    .config-controls input[type="color"] {
      width: 36px;
      height: 32px;
      border: 2px solid #37474f;
      border-radius: 4px;
      background: none;
      cursor: pointer;
    }
    .font-style-btn {
      background: #1e272c;
      border: 1px solid #37474f;
      color: #80cbc4;
      padding: 4px 8px;
      border-radius: 3px;
      cursor: pointer;
      font-size: 0.75em;
    }
    .font-style-btn.active { background: #009688; color: white; border-color: #009688; }

    .color-info-panel { background: #1e272c; padding: 10px; margin: 8px 0; border-radius: 4px; border: 1px solid #37474f; font-size: 0.8em; }
    .color-info-panel h4 { color: #80cbc4; font-size: 0.9em; margin-bottom: 6px; }
    .color-hex { font-family: Consolas, monospace; color: #b8c5d0; }
    .usage-list { list-style: none; max-height: 150px; overflow-y: auto; }
    .usage-list li { padding: 4px 6px; margin: 2px 0; border-left: 2px solid #009688; color: #b8c5d0; }
    .usage-list li.current { background: rgba(0, 150, 136, 0.15); font-weight: 600; }
    .no-usage { color: #607d8b; font-style: italic; }

    .preview-panel { display: flex; flex-direction: column; background: #263238; overflow: hidden; }
    .preview-tabs { display: flex; gap: 4px; padding: 8px 12px; border-bottom: 2px solid #37474f; background: #1e272c; flex-wrap: wrap; }
    .preview-tab {
      background: transparent;
      border: none;
      color: #80cbc4;
      padding: 6px 16px;
      font-size: 13px;
      cursor: pointer;
      border-bottom: 2px solid transparent;
    }
    .preview-tab.active { color: #009688; border-bottom-color: #009688; }
    .preview-content { flex: 1; overflow: auto; }
    .preview-content pre { margin: 0; padding: 24px; font-size: 13px; line-height: 1.6; }
    .preview-content pre, .preview-content code { font-family: "JetBrains Mono", "Fira Code", Consolas, monospace; }

    .palette-container { padding: 30px; color: #b8c5d0; }
    .palette-header { margin-bottom: 30px; border-bottom: 1px solid #37474f; padding-bottom: 15px; }
    .palette-title { color: #009688; font-size: 1.5em; margin-bottom: 8px; }
    .palette-desc { color: #607d8b; font-size: 0.9em; }
    .palette-grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(280px, 1fr)); gap: 20px; }
    .palette-card { background: #1e272c; border: 1px solid #37474f; border-radius: 8px; overflow: hidden; }
    .palette-swatch { height: 100px; border-bottom: 1px solid #37474f; }
    .palette-info { padding: 15px; }
    .palette-hex { font-family: Consolas, monospace; font-weight: bold; color: #ffffff; }
    .palette-usage-count { font-size: 0.8em; color: #009688; margin: 4px 0 12px; text-transform: uppercase; }
    .palette-usage-list { display: flex; flex-direction: column; gap: 6px; max-height: 150px; overflow-y: auto; }
    .palette-usage-item { display: flex; gap: 8px; font-size: 0.85em; background: rgba(0, 0, 0, 0.2); padding: 4px 8px; border-radius: 4px; }
    .usage-lang-tag { background: #2e3c43; color: #80cbc4; font-size: 0.75em; padding: 1px 4px; min-width: 70px; text-align: center; }

    @media (max-width: 1024px) {
      .main-container { grid-template-columns: 1fr; }
      .config-panel { border-right: none; border-bottom: 1px solid #37474f; max-height: 400px; }
    }
"""

EDITOR_SCRIPT = """
    (function () {
      const data = EDITOR_DATA;

      // Edited configs live in state.configs[group][key]; handlers receive the state explicitly
      const state = {
        original: data.languageConfigs,
        configs: JSON.parse(JSON.stringify(data.languageConfigs)),
        group: data.groups.find((group) => group !== 'General') || 'General',
        preview: data.languages.length ? data.languages[0].id : 'palette',
      };

      function el(tag, className, text) {
        const node = document.createElement(tag);
        if (className) node.className = className;
        if (text !== undefined) node.textContent = text;
        return node;
      }

      function tokenSpans(key) {
        return Array.from(document.querySelectorAll('[data-token]')).filter((span) => span.dataset.token === key);
      }

      function applyColor(key, hex) {
        document.documentElement.style.setProperty('--token-' + data.cssNames[key], hex);
        tokenSpans(key).forEach((span) => { span.style.color = hex; });
      }

      function applyFontStyle(key, fontStyle) {
        const words = (fontStyle || '').split(' ');
        tokenSpans(key).forEach((span) => {
          span.style.fontWeight = words.includes('bold') ? 'bold' : 'normal';
          span.style.fontStyle = words.includes('italic') ? 'italic' : 'normal';
        });
      }

      function setColor(state, group, key, hex, commit) {
        const config = state.configs[group][key];
        config.foreground = hex.toUpperCase();
        applyColor(key, config.foreground);
        if (commit) renderConfigList(state);
      }

      function toggleFontStyle(state, group, key, style) {
        const config = state.configs[group][key];
        const words = (config.fontStyle || '').split(' ').filter(Boolean);
        const next = words.includes(style) ? words.filter((word) => word !== style) : words.concat([style]);
        config.fontStyle = ['bold', 'italic'].filter((word) => next.includes(word)).join(' ');
        applyFontStyle(key, config.fontStyle);
        renderConfigList(state);
      }

      function colorUsage(state, color) {
        const usages = [];
        Object.entries(state.configs).forEach(([group, configs]) => {
          Object.entries(configs).forEach(([key, config]) => {
            if (config.foreground.toUpperCase() !== color) return;
            const fullLabel = group === 'General' ? config.label : group + ': ' + config.label;
            usages.push({ lang: group, key: key, fullLabel: fullLabel });
          });
        });
        return usages;
      }

      function renderUsage(state, group, key, color) {
        const panel = el('div', 'color-info-panel');
        panel.appendChild(el('h4', '', 'Current Color'));
        panel.appendChild(el('span', 'color-hex', color.toUpperCase()));
        panel.appendChild(el('h4', '', 'Also used by:'));
        const usages = colorUsage(state, color.toUpperCase());
        if (!usages.length) {
          panel.appendChild(el('div', 'no-usage', 'No other tokens use this color'));
          return panel;
        }
        const list = el('ul', 'usage-list');
        usages.forEach((usage) => {
          const current = usage.lang === group && usage.key === key;
          list.appendChild(el('li', current ? 'current' : '', usage.fullLabel));
        });
        panel.appendChild(list);
        return panel;
      }

      function renderItem(state, group, key, config) {
        const item = el('div', 'config-item');
        item.appendChild(el('div', 'config-item-label', config.label));
        item.appendChild(el('div', 'config-item-desc', config.description));
        item.appendChild(renderUsage(state, group, key, config.foreground));

        const controls = el('div', 'config-controls');
        const picker = el('input');
        picker.type = 'color';
        picker.value = config.foreground.toLowerCase();
        picker.title = 'Click to change color';
        picker.addEventListener('input', (event) => setColor(state, group, key, event.target.value, false));
        picker.addEventListener('change', (event) => setColor(state, group, key, event.target.value, true));
        controls.appendChild(picker);

        [['bold', 'B'], ['italic', 'I']].forEach(([style, text]) => {
          const active = (config.fontStyle || '').split(' ').includes(style);
          const button = el('button', 'font-style-btn' + (active ? ' active' : ''), text);
          button.addEventListener('click', () => toggleFontStyle(state, group, key, style));
          controls.appendChild(button);
        });

        item.appendChild(controls);
        return item;
      }

      function renderSection(state, group, container) {
        Object.entries(state.configs[group] || {}).forEach(([key, config]) => {
          container.appendChild(renderItem(state, group, key, config));
        });
      }

      function renderConfigList(state) {
        const container = document.getElementById('configList');
        container.replaceChildren();

        const general = state.configs['General'] || {};
        const specific = state.group === 'General' ? {} : (state.configs[state.group] || {});
        if (!Object.keys(general).length && !Object.keys(specific).length) {
          container.appendChild(el('p', 'no-usage', 'No configurations available.'));
          return;
        }

        if (Object.keys(general).length) {
          const details = el('details', 'config-section-collapsible');
          details.appendChild(el('summary', '', 'Global Tokens'));
          renderSection(state, 'General', details);
          container.appendChild(details);
        }
        if (Object.keys(specific).length) {
          const section = el('div', 'config-section');
          section.appendChild(el('h3', '', state.group + ' Tokens'));
          renderSection(state, state.group, section);
          container.appendChild(section);
        }
      }

      function switchPreview(state, id, syncGroup) {
        document.querySelectorAll('.preview-tab').forEach((tab) => {
          tab.classList.toggle('active', tab.dataset.preview === id);
        });
        document.querySelectorAll('.preview-pane').forEach((pane) => {
          pane.style.display = pane.dataset.preview === id ? 'block' : 'none';
        });
        state.preview = id;

        const language = data.languages.find((language) => language.id === id);
        if (syncGroup && language && language.group !== state.group && state.configs[language.group]) {
          state.group = language.group;
          document.getElementById('languageSelect').value = language.group;
          renderConfigList(state);
        }
      }

      function switchGroup(state, group) {
        state.group = group;
        const language = data.languages.find((language) => language.group === group);
        if (language) switchPreview(state, language.id, false);
        renderConfigList(state);
      }

      function resetTheme(state) {
        if (!confirm('Reset all changes to default theme?')) return;
        state.configs = JSON.parse(JSON.stringify(state.original));
        Object.values(state.configs).forEach((configs) => {
          Object.entries(configs).forEach(([key, config]) => {
            applyColor(key, config.foreground);
            applyFontStyle(key, config.fontStyle);
          });
        });
        renderConfigList(state);
      }

      async function saveToXml(state) {
        const button = document.getElementById('saveButton');
        const text = button.textContent;
        try {
          button.textContent = 'Saving...';
          button.disabled = true;
          const response = await fetch(data.saveUrl, {
            method: 'POST',
            headers: { 'Content-Type': 'application/json' },
            body: JSON.stringify(state.configs),
          });
          const result = await response.json();
          if (result.success) {
            const skipped = result.skipped && result.skipped.length
              ? '\\nNot in the scheme (unchanged): ' + result.skipped.join(', ')
              : '';
            alert('Theme saved to the scheme XML.' + skipped);
          } else {
            alert('Error saving theme: ' + result.error);
          }
        } catch (err) {
          alert('Server not running. Start it with "schemesync serve" and keep the terminal open.');
          console.error(err);
        } finally {
          button.textContent = text;
          button.disabled = false;
        }
      }

      const select = document.getElementById('languageSelect');
      select.value = state.group;
      select.addEventListener('change', () => switchGroup(state, select.value));
      document.querySelectorAll('.preview-tab').forEach((tab) => {
        tab.addEventListener('click', () => switchPreview(state, tab.dataset.preview, true));
      });
      document.getElementById('resetButton').addEventListener('click', () => resetTheme(state));
      document.getElementById('saveButton').addEventListener('click', () => saveToXml(state));
      renderConfigList(state);
    })();
"""
