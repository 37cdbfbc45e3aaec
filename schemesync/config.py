import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import toml

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_NAME = 'schemesync.toml'


@dataclass
class ThemeConfig:
    name: Optional[str] = None
    type: Optional[str] = None
    slug: str = 'theme'
    version: str = '1.0.0'


@dataclass
class PathsConfig:
    scheme: Path = Path('theme.xml')
    ui_theme: Path = Path('theme.theme.json')
    meta_inf: Path = Path('META-INF')
    output: Path = Path('build')
    releases: Path = Path('releases')


@dataclass
class EditorConfig:
    host: str = '127.0.0.1'
    port: int = 3000
    lock_timeout: float = 10.0


@dataclass
class Config:
    theme: ThemeConfig = field(default_factory=ThemeConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    editor: EditorConfig = field(default_factory=EditorConfig)
    root: Path = Path('.')

    @property
    def theme_json(self) -> Path:
        return self.paths.output / f'{self.theme.slug}-theme.json'

    @property
    def theme_data(self) -> Path:
        return self.paths.output / 'theme-data.json'

    @property
    def editor_html(self) -> Path:
        return self.paths.output / 'theme-editor.html'

    @property
    def archive(self) -> Path:
        return self.paths.releases / f'{self.theme.slug}-{self.theme.version}.jar'


def load_toml(file_path):
    with open(file_path, 'r') as file:
        return toml.load(file)


def _section(data, name, cls, types):
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table")

    values = {}
    for key, expected in types.items():
        if key not in section:
            continue
        value = section[key]
        if expected is float and isinstance(value, int) and not isinstance(value, bool):
            value = float(value)
        if expected is Path and isinstance(value, str):
            value = Path(value)
        if not isinstance(value, expected) or (isinstance(value, bool) and expected is not bool):
            raise ConfigError(f"{name}.{key} must be {expected.__name__}, got {value!r}")
        values[key] = value
    return cls(**values)


def load_config(path=None) -> Config:
    """
    Reads schemesync.toml. Relative paths resolve against the file's directory; a missing
    file gives the defaults.
    """
    explicit = path is not None
    path = Path(path) if explicit else Path(CONFIG_NAME)
    if path.exists():
        try:
            data = load_toml(path)
        except (OSError, toml.TomlDecodeError) as e:
            raise ConfigError(f"Could not read {path}: {e}") from e
    elif not explicit:
        logger.debug("No %s found, using defaults", CONFIG_NAME)
        data = {}
    else:
        raise ConfigError(f"Config file not found: {path}")

    theme = _section(data, 'theme', ThemeConfig, {'name': str, 'type': str, 'slug': str, 'version': str})
    paths = _section(data, 'paths', PathsConfig, {
        'scheme': Path, 'ui_theme': Path, 'meta_inf': Path, 'output': Path, 'releases': Path,
    })
    editor = _section(data, 'editor', EditorConfig, {'host': str, 'port': int, 'lock_timeout': float})

    if theme.type not in (None, 'dark', 'light'):
        raise ConfigError(f"theme.type must be 'dark' or 'light', got {theme.type!r}")

    root = path.resolve().parent
    for name in ('scheme', 'ui_theme', 'meta_inf', 'output', 'releases'):
        value = getattr(paths, name)
        if not value.is_absolute():
            setattr(paths, name, root / value)

    return Config(theme, paths, editor, root)
