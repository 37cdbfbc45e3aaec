import logging
import os
import zipfile
from pathlib import Path

from .errors import ArchiveError

logger = logging.getLogger(__name__)


def archive_entries(meta_inf, scheme, ui_theme, slug) -> dict:
    """
    Entries of the plugin jar: {archive name: source file}. META-INF is added recursively.
    """
    meta_inf, scheme, ui_theme = Path(meta_inf), Path(scheme), Path(ui_theme)
    for path in (meta_inf, scheme, ui_theme):
        if not path.exists():
            raise ArchiveError(f"Missing archive input: {path}")

    entries = {}
    for file in sorted(meta_inf.rglob('*')):
        if file.is_file():
            entries[f'META-INF/{file.relative_to(meta_inf).as_posix()}'] = file
    entries[f'{slug}.xml'] = scheme
    entries[f'{slug}.theme.json'] = ui_theme
    return entries


def build_archive(output_path, entries: dict) -> Path:
    """
    Writes a deflated zip. Entry values are files (Path) or contents (str, bytes).
    A failed build leaves no file behind.
    """
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        if output_path.exists():
            output_path.unlink()
            logger.info("Removed existing %s", output_path.name)
        with zipfile.ZipFile(output_path, 'w', compression=zipfile.ZIP_DEFLATED, compresslevel=9) as archive:
            archive.writestr(zipfile.ZipInfo('META-INF/'), '')
            for name, source in entries.items():
                if isinstance(source, (bytes, str)):
                    archive.writestr(name, source)
                else:
                    archive.write(source, name)
                logger.debug("Added %s", name)
    except (OSError, ValueError, zipfile.BadZipFile) as e:
        if output_path.exists():
            os.remove(output_path)
        raise ArchiveError(f"Could not build {output_path}: {e}") from e

    return output_path
