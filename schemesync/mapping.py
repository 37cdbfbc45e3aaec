from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class MappingEntry:
    key: str
    label: str
    scopes: Tuple[str, ...]
    description: str = ""
    fallback: Optional[str] = None
    language: str = "General"

    def __post_init__(self):
        if isinstance(self.scopes, str):
            object.__setattr__(self, "scopes", (self.scopes,))
        else:
            object.__setattr__(self, "scopes", tuple(self.scopes))
        if not self.scopes:
            raise ValueError(f"Mapping for {self.key} must have at least one scope")


@dataclass(frozen=True)
class Language:
    id: str
    label: str
    group: str
    lexer: str
    scope_suffix: str


def entry(key, label, scopes, description="", fallback=None, language="General"):
    return MappingEntry(key, label, tuple(scopes), description, fallback, language)


# Order matters: theme rules are emitted in this order and later rules win scope ties
MAPPINGS = (
    # Comments
    entry('DEFAULT_LINE_COMMENT', 'Comment', ['comment.line', 'punctuation.definition.comment'], 'Single-line comments (//)'),
    entry('DEFAULT_BLOCK_COMMENT', 'Block Comment', ['comment.block'], 'Multi-line comments (/* */)'),
    entry('DEFAULT_DOC_COMMENT', 'Doc Comment', ['comment.block.documentation'], 'Documentation comments (///)'),

    # Keywords & language constructs
    entry('DEFAULT_KEYWORD', 'Keyword', ['keyword', 'storage.type', 'storage.modifier'], 'Language keywords (if, for, class, etc.)'),
    entry('DEFAULT_OPERATION_SIGN', 'Operator', ['keyword.operator', 'punctuation.operator'], 'Operators (+, -, *, etc.)'),

    # Strings & numbers
    entry('DEFAULT_STRING', 'String', ['string', 'string.quoted'], 'String literals'),
    entry('DEFAULT_VALID_STRING_ESCAPE', 'String Escape', ['constant.character.escape'], 'Escape sequences inside strings'),
    entry('DEFAULT_NUMBER', 'Number', ['constant.numeric'], 'Numeric literals'),
    entry('DEFAULT_CONSTANT', 'Constant', ['constant.language', 'constant.other'], 'Named constants'),

    # Functions & methods
    entry('DEFAULT_FUNCTION_CALL', 'Function Call', ['entity.name.function', 'support.function'], 'Function invocations'),
    entry('DEFAULT_FUNCTION_DECLARATION', 'Function Declaration', ['entity.name.function', 'meta.function'], 'Function definitions'),
    entry('DEFAULT_INSTANCE_METHOD', 'Method', ['entity.name.function.member'], 'Object methods'),
    entry('DEFAULT_STATIC_METHOD', 'Static Method', ['entity.name.function.static'], 'Static methods'),

    # Classes & types
    entry('DEFAULT_CLASS_NAME', 'Class Name', ['entity.name.class', 'entity.name.type.class', 'support.class'], 'Class identifiers'),
    entry('DEFAULT_CLASS_REFERENCE', 'Class Reference', ['entity.name.type', 'support.type'], 'References to types'),
    entry('DEFAULT_INTERFACE_NAME', 'Interface Name', ['entity.name.type.interface'], 'Interface identifiers'),
    entry('ABSTRACT_CLASS_NAME_ATTRIBUTES', 'Abstract Class', ['entity.name.type.class.abstract'], 'Abstract class identifiers'),

    # Variables & parameters
    entry('DEFAULT_IDENTIFIER', 'Variable', ['variable', 'variable.other'], 'Plain identifiers'),
    entry('DEFAULT_LOCAL_VARIABLE', 'Local Variable', ['variable.other.local'], 'Local variable names'),
    entry('DEFAULT_PARAMETER', 'Parameter', ['variable.parameter'], 'Function parameters'),
    entry('DEFAULT_INSTANCE_FIELD', 'Instance Field', ['variable.other.property', 'variable.other.member'], 'Object properties'),
    entry('DEFAULT_STATIC_FIELD', 'Static Field', ['variable.other.constant'], 'Static properties'),

    # Punctuation
    entry('DEFAULT_BRACES', 'Braces', ['punctuation.section.braces', 'punctuation.definition.block'], 'Curly braces { }'),
    entry('DEFAULT_BRACKETS', 'Brackets', ['punctuation.section.brackets', 'punctuation.definition.array'], 'Square brackets [ ]'),
    entry('DEFAULT_PARENTHS', 'Parentheses', ['punctuation.section.parens', 'punctuation.definition.parameters'], 'Round brackets ( )'),
    entry('DEFAULT_COMMA', 'Comma', ['punctuation.separator.comma'], 'Comma separators'),
    entry('DEFAULT_DOT', 'Dot', ['punctuation.accessor', 'punctuation.separator.period'], 'Dot accessor'),
    entry('DEFAULT_SEMICOLON', 'Semicolon', ['punctuation.terminator.statement'], 'Statement terminators'),

    # Annotations & decorators
    entry('ANNOTATION_NAME_ATTRIBUTES', 'Annotation', ['storage.type.annotation', 'punctuation.definition.annotation'], 'Annotations and decorators'),
    entry('ANNOTATION_ATTRIBUTE_NAME_ATTRIBUTES', 'Annotation Attribute', ['variable.annotation'], 'Named annotation arguments'),

    # HTML/XML
    entry('HTML_TAG_NAME', 'HTML Tag', ['entity.name.tag.html', 'entity.name.tag'], '<div>, <span>', language='HTML'),
    entry('DEFAULT_ATTRIBUTE', 'HTML Attribute', ['entity.other.attribute-name'], 'class, id, src', language='HTML'),
    entry('XML_TAG_NAME', 'XML Tag', ['entity.name.tag.xml'], '<tag>', language='XML'),

    # CSS
    entry('CSS.CLASS_NAME', 'CSS Class', ['entity.other.attribute-name.class.css'], '.className', language='CSS'),
    entry('CSS.HASH', 'CSS ID', ['entity.other.attribute-name.id.css'], '#id', language='CSS'),
    entry('CSS.PROPERTY_NAME', 'CSS Property', ['support.type.property-name.css'], 'color, padding, etc.', language='CSS'),
    entry('CSS.PROPERTY_VALUE', 'CSS Property Value', ['support.constant.property-value.css', 'meta.property-value.css'], 'Property values', language='CSS'),
    entry('CSS.FUNCTION', 'CSS Function', ['support.function.css'], 'calc(), rgb(), etc.', language='CSS'),
    entry('CSS.TAG_NAME', 'CSS Tag', ['entity.name.tag.css'], 'div, span, etc.', language='CSS'),
    entry('CSS.PSEUDO', 'CSS Pseudo Element', ['entity.other.attribute-name.pseudo-element.css', 'entity.other.attribute-name.pseudo-class.css'], ':hover, ::before', language='CSS'),

    # JavaScript/TypeScript
    entry('JS.THIS_SUPER', 'JS This/Super', ['variable.language.this', 'variable.language.super'], 'Special keywords', language='JavaScript'),
    entry('JS.NULL_UNDEFINED', 'JS Null/Undefined', ['constant.language.null', 'constant.language.undefined'], 'Null values', language='JavaScript'),
    entry('JS.MODULE_KEYWORD', 'JS Module Keyword', ['keyword.control.import', 'keyword.control.export', 'keyword.control.from'], 'import, export', language='JavaScript'),
    entry('JS.REGEXP', 'JS RegExp', ['string.regexp'], 'RegExp literals', language='JavaScript'),
    entry('TS.TYPE_PARAMETER', 'TS Type Parameter', ['entity.name.type.parameter'], 'Generic type params <T>', language='TypeScript'),

    # JSON
    entry('JSON.PROPERTY_KEY', 'JSON Property Key', ['support.type.property-name.json', 'meta.structure.dictionary.key.json'], 'Object keys', language='JSON'),
    entry('JSON.KEYWORD', 'JSON Keyword', ['constant.language.json'], 'true, false, null', language='JSON'),

    # YAML
    entry('YAML_SCALAR_KEY', 'YAML Key', ['entity.name.tag.yaml'], 'YAML keys', language='YAML'),
    entry('YAML_SCALAR_VALUE', 'YAML Value', ['string.unquoted.yaml'], 'YAML values', language='YAML'),

    # Markdown
    entry('MARKDOWN_HEADER_LEVEL_1', 'Markdown Heading', ['markup.heading', 'entity.name.section.markdown', 'punctuation.definition.heading.markdown'], '# Headers', language='Markdown'),
    entry('MARKDOWN.TEXT', 'Markdown Text', ['text.html.markdown'], 'Plain paragraph text', language='Markdown'),
    entry('MARKDOWN_BOLD', 'Markdown Bold', ['markup.bold'], '**bold**', language='Markdown'),
    entry('MARKDOWN_ITALIC', 'Markdown Italic', ['markup.italic'], '*italic*', language='Markdown'),
    entry('MARKDOWN_STRIKETHROUGH', 'Markdown Strikethrough', ['markup.strikethrough'], '~~strike~~', language='Markdown'),
    entry('MARKDOWN_BLOCK_QUOTE', 'Markdown Blockquote', ['markup.quote', 'punctuation.definition.quote.begin.markdown'], '> quote', language='Markdown'),
    entry('MARKDOWN_CODE_SPAN', 'Markdown Code', ['markup.inline.raw', 'markup.fenced_code.block.markdown', 'markup.raw.block.markdown'], '`code`', language='Markdown'),
    entry('MARKDOWN_LINK_TEXT', 'Markdown Link', ['markup.underline.link', 'string.other.link.title.markdown'], '[text](url)', language='Markdown'),
    entry('MARKDOWN_HRULE', 'Markdown HRule', ['meta.separator.markdown'], '---', language='Markdown'),
    entry('MARKDOWN_LIST_MARKER', 'Markdown List Marker', ['punctuation.definition.list.begin.markdown'], '- or 1.', language='Markdown'),

    # Bash
    entry('BASH.EXTERNAL_COMMAND', 'Bash Command', ['support.function.builtin.shell'], 'Shell commands', language='Bash'),

    # C#
    entry('ReSharper.NAMESPACE_IDENTIFIER', 'C# Namespace', ['entity.name.type.namespace.cs'], 'Namespace names', language='C#'),
    entry('ReSharper.CLASS_IDENTIFIER', 'C# Class', ['entity.name.type.class.cs'], 'C# Class names', 'DEFAULT_CLASS_NAME', 'C#'),
    entry('ReSharper.INTERFACE_IDENTIFIER', 'C# Interface', ['entity.name.type.interface.cs'], 'C# Interface names', 'DEFAULT_INTERFACE_NAME', 'C#'),
    entry('ReSharper.STRUCT_IDENTIFIER', 'C# Struct', ['entity.name.type.struct.cs'], 'C# Struct names', 'DEFAULT_CLASS_NAME', 'C#'),
    entry('ReSharper.ENUM_IDENTIFIER', 'C# Enum', ['entity.name.type.enum.cs'], 'Enum types', 'DEFAULT_CLASS_NAME', 'C#'),
    entry('ReSharper.DELEGATE_IDENTIFIER', 'C# Delegate', ['entity.name.type.delegate.cs'], 'Delegate types', 'DEFAULT_CLASS_NAME', 'C#'),
    entry('CSHARP_OPERATOR_SIGN', 'C# Operator', ['keyword.operator.cs'], 'C# specific operators', 'DEFAULT_OPERATION_SIGN', 'C#'),
    entry('ENUM_CONST', 'Enum Member', ['variable.other.enummember.cs', 'constant.other.enum.cs', 'variable.other.constant.cs', 'entity.name.variable.enum-member.cs'], 'Enum member values', language='C#'),

    # Documentation
    entry('DEFAULT_DOC_COMMENT_TAG', 'Doc Comment Tag', ['storage.type.class.jsdoc', 'keyword.other.documentation'], '@param, <summary>'),
    entry('DEFAULT_DOC_COMMENT_TAG_VALUE', 'Doc Comment Tag Value', ['variable.other.jsdoc'], 'Names following doc tags'),

    # SQL
    entry('SQL_KEYWORD', 'SQL Keyword', ['keyword.sql', 'keyword.other.sql', 'support.function.sql'], 'SELECT, FROM, WHERE, etc.', 'DEFAULT_KEYWORD', 'SQL'),
    entry('SQL_STRING', 'SQL String', ['string.quoted.single.sql', 'string.quoted.double.sql'], "'string'", 'DEFAULT_STRING', 'SQL'),
    entry('SQL_NUMBER', 'SQL Number', ['constant.numeric.sql'], '123', 'DEFAULT_NUMBER', 'SQL'),
    entry('SQL_COMMENT', 'SQL Comment', ['comment.line.sql', 'comment.block.sql', 'comment.line.double-dash.sql'], '-- single line or /* multi-line */', 'DEFAULT_LINE_COMMENT', 'SQL'),
    entry('SQL_PARAMETER', 'SQL Parameter', ['variable.parameter.sql'], '@variable', language='SQL'),
    entry('SQL_IDENTIFIER', 'SQL Identifier', ['variable.other.sql', 'entity.name.section.sql'], 'table or column names', language='SQL'),
)

LANGUAGES = (
    Language('csharp', 'C#', 'C#', 'csharp', 'cs'),
    Language('sql', 'SQL Server', 'SQL', 'tsql', 'sql'),
    Language('typescript', 'TypeScript', 'TypeScript', 'typescript', 'ts'),
    Language('javascript', 'JavaScript', 'JavaScript', 'javascript', 'js'),
    Language('html', 'HTML', 'HTML', 'html', 'html'),
    Language('css', 'CSS', 'CSS', 'css', 'css'),
    Language('json', 'JSON', 'JSON', 'json', 'json'),
    Language('yaml', 'YAML', 'YAML', 'yaml', 'yaml'),
    Language('markdown', 'Markdown', 'Markdown', 'markdown', 'markdown'),
    Language('bash', 'Bash', 'Bash', 'bash', 'shell'),
    Language('xml', 'XML', 'XML', 'xml', 'xml'),
)


def groups(mappings=MAPPINGS):
    """Editor groups in first-seen order, General first."""
    seen = ['General']
    for mapping in mappings:
        if mapping.language not in seen:
            seen.append(mapping.language)
    return seen


def language_by_id(language_id: str) -> Language:
    for language in LANGUAGES:
        if language.id == language_id:
            return language
    raise KeyError(language_id)
