import re
from enum import IntEnum

HEX_PATTERN = r'#?([0-9a-fA-F]{1,6})'


def is_hex_color(color):
    if not isinstance(color, str):
        return False
    return re.fullmatch(HEX_PATTERN, color) is not None


def _digits(color: str) -> str:
    match = re.fullmatch(HEX_PATTERN, color.strip()) if isinstance(color, str) else None
    if not match:
        raise ValueError(f"Not a hex color: {color!r}")
    # IntelliJ drops leading zeros when it serializes colors
    return match.group(1).zfill(6)


def to_display(color: str) -> str:
    """
    Returns the color as it is shown to users and written to theme files: #RRGGBB
    """
    return "#" + _digits(color).upper()


def to_source(color: str) -> str:
    """
    Returns the color as the scheme XML stores it: rrggbb
    """
    return _digits(color).lower()


class StyleFlag(IntEnum):
    NORMAL = 0
    BOLD = 1
    ITALIC = 2
    BOLD_ITALIC = 3

    @property
    def keywords(self) -> str:
        words = []
        if self & StyleFlag.BOLD:
            words.append("bold")
        if self & StyleFlag.ITALIC:
            words.append("italic")
        return " ".join(words)

    @classmethod
    def from_keywords(cls, text):
        words = set((text or "").split())
        unknown = words - {"bold", "italic"}
        if unknown:
            raise ValueError(f"Unknown font style: {' '.join(sorted(unknown))}")
        flag = cls.NORMAL
        if "bold" in words:
            flag |= cls.BOLD
        if "italic" in words:
            flag |= cls.ITALIC
        return cls(flag)

    @classmethod
    def from_code(cls, code):
        try:
            return cls(int(code))
        except (TypeError, ValueError):
            return cls.NORMAL
