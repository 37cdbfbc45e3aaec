import json
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .colors import StyleFlag
from .extractor import (
    Attribute, extract, extract_background, extract_color, extract_palette, find_block, scheme_info,
)
from .mapping import MAPPINGS, MappingEntry, groups

logger = logging.getLogger(__name__)

# (theme color, source lookup, default). Defaults are what keeps an incomplete scheme renderable.
EDITOR_COLORS = (
    ('editor.background', ('block-background', 'TEXT'), '#263238'),
    ('editor.foreground', ('block-foreground', 'TEXT'), '#b8c5d0'),
    ('editor.lineHighlightBackground', ('color', 'CARET_ROW_COLOR'), '#1B2529'),
    ('editor.selectionBackground', ('color', 'SELECTION_BACKGROUND'), '#314549'),
    ('editorCursor.foreground', ('color', 'CARET_COLOR'), '#FFCC00'),
    ('editorLineNumber.foreground', ('color', 'LINE_NUMBERS_COLOR'), '#475F63'),
    ('editorLineNumber.activeForeground', ('color', 'LINE_NUMBER_ON_CARET_ROW_COLOR'), '#607D86'),
    ('editorIndentGuide.background', ('color', 'INDENT_GUIDE'), '#37474F'),
    ('editorIndentGuide.activeBackground', ('color', 'SELECTED_INDENT_GUIDE'), '#009688'),
    ('editorWhitespace.foreground', ('color', 'WHITESPACES'), '#65737E'),
)


@dataclass(frozen=True)
class TokenRule:
    label: str
    scopes: Tuple[str, ...]
    foreground: str
    style: StyleFlag = StyleFlag.NORMAL
    key: Optional[str] = None

    @property
    def font_style(self) -> str:
        return self.style.keywords

    def to_dict(self) -> dict:
        settings = {'foreground': self.foreground}
        if self.style:
            settings['fontStyle'] = self.font_style
        return {'name': self.label, 'scope': list(self.scopes), 'settings': settings}


@dataclass
class ThemeDocument:
    name: str
    type: str
    colors: dict
    token_rules: list

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'type': self.type,
            'colors': dict(self.colors),
            'tokenColors': [rule.to_dict() for rule in self.token_rules],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2) + "\n"


@dataclass(frozen=True)
class TokenConfig:
    label: str
    description: str
    foreground: str
    font_style: str = ""
    fallback: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            'label': self.label,
            'description': self.description,
            'foreground': self.foreground,
            'fontStyle': self.font_style,
        }
        if self.fallback:
            data['fallback'] = self.fallback
        return data


def resolve(xml_text: str, mapping: MappingEntry) -> Attribute:
    attribute = extract(xml_text, mapping.key)
    if attribute.foreground is None and mapping.fallback:
        logger.debug("%s has no color, falling back to %s", mapping.key, mapping.fallback)
        attribute = extract(xml_text, mapping.fallback)
    return attribute


def editor_colors(xml_text: str) -> dict:
    colors = {}
    for region, (kind, name), default in EDITOR_COLORS:
        if kind == 'block-background':
            value = extract_background(xml_text, name)
        elif kind == 'block-foreground':
            value = extract(xml_text, name).foreground
        else:
            value = extract_color(xml_text, name)
        colors[region] = value or default
    return colors


def theme_identity(xml_text: str, name=None, theme_type=None):
    info = scheme_info(xml_text)
    if not name:
        name = info.get('name') or 'Untitled'
    if not theme_type:
        theme_type = 'dark' if info.get('parent_scheme') == 'Darcula' else 'light'
    return name, theme_type


def build(xml_text: str, mappings=MAPPINGS, name=None, theme_type=None) -> ThemeDocument:
    name, theme_type = theme_identity(xml_text, name, theme_type)

    rules = []
    for mapping in mappings:
        attribute = resolve(xml_text, mapping)
        if attribute.foreground is None:
            logger.debug("Skipping %s: no color in scheme", mapping.key)
            continue
        rules.append(TokenRule(mapping.label, mapping.scopes, attribute.foreground, attribute.style, mapping.key))

    return ThemeDocument(name, theme_type, editor_colors(xml_text), rules)


def build_language_configs(xml_text: str, mappings=MAPPINGS) -> dict:
    """
    Groups resolvable mappings by editor language: {group: {key: TokenConfig}}
    """
    configs = {group: {} for group in groups(mappings)}
    for mapping in mappings:
        attribute = resolve(xml_text, mapping)
        if attribute.foreground is None:
            continue
        own = extract(xml_text, mapping.key)
        fallback = mapping.fallback if own.foreground is None else None
        # A block of its own keeps its own FONT_TYPE, only the color is inherited
        style = own.font_style if find_block(xml_text, mapping.key) else attribute.font_style
        configs[mapping.language][mapping.key] = TokenConfig(
            mapping.label, mapping.description, attribute.foreground, style, fallback
        )
    return configs


def build_theme_data(xml_text: str, mappings=MAPPINGS) -> dict:
    configs = build_language_configs(xml_text, mappings)
    return {
        'allColors': extract_palette(xml_text),
        'languageConfigs': {
            group: {key: config.to_dict() for key, config in entries.items()}
            for group, entries in configs.items()
        },
    }
