import re
from dataclasses import dataclass
from typing import Optional

from .colors import StyleFlag, to_display

BLOCK_PATTERN = r'<option name="{name}">\s*<value>[\s\S]*?</value>\s*</option>'
FOREGROUND_PATTERN = r'(<option name="FOREGROUND" value=")([^"]+)(")'
BACKGROUND_PATTERN = r'(<option name="BACKGROUND" value=")([^"]+)(")'
FONT_TYPE_PATTERN = r'(<option name="FONT_TYPE" value=")([^"]+)(")'
COLOR_PATTERN = r'<option name="{name}"[^>]*?\svalue="([^"]+)"'
PALETTE_PATTERN = r'value="([0-9A-Fa-f]{6})"'
SCHEME_PATTERN = r'<scheme\b([^>]*)>'
XML_ATTR_PATTERN = r'([\w.-]+)="([^"]*)"'


@dataclass(frozen=True)
class Attribute:
    foreground: Optional[str] = None
    style: StyleFlag = StyleFlag.NORMAL

    @property
    def font_style(self) -> str:
        return self.style.keywords


NOT_FOUND = Attribute()


def block_regex(name: str):
    return re.compile(BLOCK_PATTERN.format(name=re.escape(name)))


def find_block(xml_text: str, name: str):
    """Returns the match of the first attribute block named `name`, or None."""
    return block_regex(name).search(xml_text)


def _display_or_none(value):
    try:
        return to_display(value)
    except ValueError:
        return None


def extract(xml_text: str, name: str) -> Attribute:
    match = find_block(xml_text, name)
    if not match:
        return NOT_FOUND

    block = match.group(0)
    fg = re.search(FOREGROUND_PATTERN, block)
    ft = re.search(FONT_TYPE_PATTERN, block)

    foreground = _display_or_none(fg.group(2)) if fg else None
    style = StyleFlag.from_code(ft.group(2)) if ft else StyleFlag.NORMAL
    return Attribute(foreground, style)


def extract_background(xml_text: str, name: str) -> Optional[str]:
    match = find_block(xml_text, name)
    if not match:
        return None
    bg = re.search(BACKGROUND_PATTERN, match.group(0))
    return _display_or_none(bg.group(2)) if bg else None


def extract_color(xml_text: str, name: str) -> Optional[str]:
    """Value of a plain <option name="..." value="..."/> entry, e.g. from <colors>."""
    match = re.search(COLOR_PATTERN.format(name=re.escape(name)), xml_text)
    return _display_or_none(match.group(1)) if match else None


def extract_palette(xml_text: str) -> list:
    colors = {to_display(value) for value in re.findall(PALETTE_PATTERN, xml_text)}
    return sorted(colors)


def scheme_info(xml_text: str) -> dict:
    match = re.search(SCHEME_PATTERN, xml_text)
    if not match:
        return {}
    return dict(re.findall(XML_ATTR_PATTERN, match.group(1)))
