import logging
import os
import re
import shutil
import tempfile
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .colors import StyleFlag, is_hex_color, to_display, to_source
from .errors import MalformedInputError, PersistenceError
from .extractor import FONT_TYPE_PATTERN, FOREGROUND_PATTERN, extract, find_block

logger = logging.getLogger(__name__)

VALUE_CLOSE_PATTERN = r'([ \t]*)</value>'
FOREGROUND_OPTION = '<option name="FOREGROUND" value="{color}" />'
FONT_TYPE_OPTION = '<option name="FONT_TYPE" value="{code}" />'


@dataclass(frozen=True)
class Edit:
    foreground: Optional[str] = None
    style: Optional[StyleFlag] = None
    # Key the shown color was inherited from, when the block has no FOREGROUND
    fallback: Optional[str] = None


def _inherits(xml_text: str, edit: Edit) -> bool:
    if not edit.fallback:
        return False
    return extract(xml_text, edit.fallback).foreground == to_display(edit.foreground)


def _update_block(block: str, edit: Edit, source: str = '') -> str:
    if edit.foreground is not None:
        color = to_source(edit.foreground)
        if re.search(FOREGROUND_PATTERN, block):
            block = re.sub(FOREGROUND_PATTERN, lambda m: m.group(1) + color + m.group(3), block, count=1)
        elif not _inherits(source, edit):
            block = _inject_option(block, FOREGROUND_OPTION.format(color=color))

    if edit.style is not None:
        code = str(int(edit.style))
        if re.search(FONT_TYPE_PATTERN, block):
            block = re.sub(FONT_TYPE_PATTERN, lambda m: m.group(1) + code + m.group(3), block, count=1)
        elif edit.style != StyleFlag.NORMAL:
            block = _inject_option(block, FONT_TYPE_OPTION.format(code=code))

    return block


def _inject_option(block: str, option: str) -> str:
    """
    Inserts an option just before the block's </value>, on its own line with the
    block's line ending, indented one level deeper than </value>.
    """
    close = re.search(VALUE_CLOSE_PATTERN, block)
    indent = close.group(1)
    head = block[:close.start()]
    if close.start() == 0 or head.endswith('\n'):
        newline = '\r\n' if head.endswith('\r\n') else '\n'
        insert = f"{indent}  {option}{newline}"
    else:
        insert = option
    return head + insert + block[close.start():]


def apply_edits(xml_text: str, edit_set: dict) -> str:
    source = xml_text
    for key, edit in edit_set.items():
        match = find_block(xml_text, key)
        if not match:
            logger.debug("No block for %s, edit skipped", key)
            continue
        updated = _update_block(match.group(0), edit, source)
        xml_text = xml_text[:match.start()] + updated + xml_text[match.end():]
    return xml_text


def missing_keys(xml_text: str, edit_set: dict) -> list:
    return [key for key in edit_set if not find_block(xml_text, key)]


def _parse_edit(language, key, data) -> Edit:
    where = f"{language}.{key}"
    if not isinstance(data, dict):
        raise MalformedInputError(f"Edit for {where} must be an object")

    foreground = data.get('foreground')
    if foreground is not None and not (is_hex_color(foreground) and len(foreground.lstrip('#')) == 6):
        raise MalformedInputError(f"Invalid foreground for {where}: {foreground!r}")

    style = None
    if 'fontStyle' in data:
        font_style = data['fontStyle']
        if font_style is not None and not isinstance(font_style, str):
            raise MalformedInputError(f"Invalid fontStyle for {where}: {font_style!r}")
        try:
            style = StyleFlag.from_keywords(font_style)
        except ValueError as e:
            raise MalformedInputError(f"Invalid fontStyle for {where}: {e}") from e

    fallback = data.get('fallback')
    if fallback is not None and not isinstance(fallback, str):
        raise MalformedInputError(f"Invalid fallback for {where}: {fallback!r}")

    return Edit(foreground, style, fallback)


def parse_edit_payload(payload) -> dict:
    """
    Flattens {language: {key: {foreground, fontStyle, fallback}}} into an edit set {key: Edit}.
    The same key under several languages resolves to the last one.
    """
    if not isinstance(payload, dict):
        raise MalformedInputError("Payload must be an object of languages")

    edit_set = {}
    for language, configs in payload.items():
        if not isinstance(configs, dict):
            raise MalformedInputError(f"Language {language} must map keys to edits")
        for key, data in configs.items():
            edit_set[key] = _parse_edit(language, key, data)
    return edit_set


class SchemeDocument:
    """
    The scheme XML on disk. All writes go through save(), one at a time.
    """

    def __init__(self, path, lock_timeout=10.0, encoding='utf-8'):
        self.path = Path(path)
        self.lock_timeout = lock_timeout
        self.encoding = encoding
        self._lock = threading.Lock()

    def read(self) -> str:
        try:
            with open(self.path, 'r', encoding=self.encoding, newline='') as file:
                return file.read()
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Could not read {self.path}: {e}") from e

    def save(self, edit_set: dict) -> list:
        """
        Applies the edit set and writes the document back. Returns the keys that have no
        block in the document.
        """
        if not self._lock.acquire(timeout=self.lock_timeout):
            raise PersistenceError(f"Timed out waiting for {self.path}")
        try:
            xml_text = self.read()
            skipped = missing_keys(xml_text, edit_set)
            updated = apply_edits(xml_text, edit_set)
            if updated != xml_text:
                self._write(updated)
            logger.info("Saved %d edits to %s", len(edit_set) - len(skipped), self.path)
            return skipped
        finally:
            self._lock.release()

    def _write(self, text: str):
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
            with os.fdopen(fd, 'w', encoding=self.encoding, newline='') as file:
                file.write(text)
            shutil.copymode(self.path, tmp_path)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise PersistenceError(f"Could not write {self.path}: {e}") from e
