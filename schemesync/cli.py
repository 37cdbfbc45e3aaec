import argparse
import json
import logging
from pathlib import Path

from . import __version__
from .builder import build, build_language_configs, build_theme_data
from .config import load_config
from .editor import write_editor
from .errors import PersistenceError, SchemeSyncError
from .extractor import extract_palette
from .packaging import archive_entries, build_archive
from .server import serve
from .writer import SchemeDocument


def read_scheme(config) -> str:
    return SchemeDocument(config.paths.scheme).read()


def write_json(path: Path, data):
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as file:
            if isinstance(data, str):
                file.write(data)
            else:
                json.dump(data, file, indent=2)
                file.write('\n')
    except OSError as e:
        raise PersistenceError(f"Could not write {path}: {e}") from e


def convert(config, output=None) -> Path:
    theme = build(read_scheme(config), name=config.theme.name, theme_type=config.theme.type)
    output = Path(output) if output else config.theme_json
    write_json(output, theme.to_json())
    print(f"Converted {config.paths.scheme.name} -> {output}")
    print(f"  {len(theme.token_rules)} token rules, {len(theme.colors)} editor colors")
    return output


def extract(config, output=None) -> Path:
    data = build_theme_data(read_scheme(config))
    output = Path(output) if output else config.theme_data
    write_json(output, data)
    tokens = sum(len(configs) for configs in data['languageConfigs'].values())
    print(f"Extracted {len(data['allColors'])} colors and {tokens} token configs -> {output}")
    return output


def editor(config, output=None) -> Path:
    xml_text = read_scheme(config)
    theme = build(xml_text, name=config.theme.name, theme_type=config.theme.type)
    output = Path(output) if output else config.editor_html
    try:
        write_editor(output, theme, build_language_configs(xml_text), extract_palette(xml_text))
    except OSError as e:
        raise PersistenceError(f"Could not write {output}: {e}") from e
    print(f"Generated interactive editor -> {output}")
    print("Run 'schemesync serve' to edit and save colors back to the scheme")
    return output


def package(config, output=None) -> Path:
    entries = archive_entries(config.paths.meta_inf, config.paths.scheme, config.paths.ui_theme, config.theme.slug)
    output = Path(output) if output else config.archive
    build_archive(output, entries)
    print(f"Built {output.name} ({output.stat().st_size / 1024:.2f} KB)")
    print(f"  Location: {output}")
    return output


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="schemesync",
        description="Convert a JetBrains color scheme to a TextMate theme, edit it and package it"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-c", "--config",
        help="Path to schemesync.toml (default: ./schemesync.toml)"
    )
    parser.add_argument(
        "-p", "--print",
        action="store_true",
        help="Prints debug messages"
    )

    commands = parser.add_subparsers(dest="command", required=True)
    for name, help_text in (
        ("convert", "Write the TextMate theme JSON"),
        ("extract", "Write the palette and per-language token configs"),
        ("editor", "Write the interactive editor page"),
    ):
        command = commands.add_parser(name, help=help_text)
        command.add_argument("-o", "--output", help="Output path")
    commands.add_parser("serve", help="Serve the editor and save edits back to the scheme")
    package_parser = commands.add_parser("package", help="Build the plugin archive")
    package_parser.add_argument("-o", "--output", help="Output path")
    commands.add_parser("build", help="convert, extract and editor in one go")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.print else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
        if args.command == "convert":
            convert(config, args.output)
        elif args.command == "extract":
            extract(config, args.output)
        elif args.command == "editor":
            editor(config, args.output)
        elif args.command == "serve":
            serve(config)
        elif args.command == "package":
            package(config, args.output)
        elif args.command == "build":
            convert(config)
            extract(config)
            editor(config)
    except SchemeSyncError as e:
        print(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
