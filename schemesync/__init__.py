from .colors import StyleFlag, to_display, to_source
from .extractor import Attribute, extract
from .mapping import MAPPINGS, LANGUAGES, MappingEntry, Language
from .builder import ThemeDocument, TokenRule, build, build_language_configs
from .writer import Edit, SchemeDocument, apply_edits, parse_edit_payload

__version__ = "1.0.0"
