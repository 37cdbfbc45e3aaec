"""
Syntax highlighting for the editor preview.

Pygments does the lexing and HTML output. Its token types are translated to
TextMate scopes so the theme's tokenColors rules can be applied to them, with
the usual TextMate precedence: the most specific matching scope wins, and on a
tie the rule declared last wins.
"""
import logging

from pygments import highlight
from pygments.filter import Filter
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.style import Style
from pygments.token import STANDARD_TYPES, Token

from .mapping import Language, language_by_id

logger = logging.getLogger(__name__)

TOKEN_SCOPES = {
    Token.Comment: 'comment.line',
    Token.Comment.Single: 'comment.line',
    Token.Comment.Hashbang: 'comment.line',
    Token.Comment.Multiline: 'comment.block',
    Token.Comment.Special: 'comment.block.documentation',
    Token.Comment.Preproc: 'keyword.other.preprocessor',
    Token.Keyword: 'keyword',
    Token.Keyword.Constant: 'constant.language',
    Token.Keyword.Declaration: 'storage.modifier',
    Token.Keyword.Namespace: 'keyword.control.import',
    Token.Keyword.Pseudo: 'keyword',
    Token.Keyword.Reserved: 'keyword',
    Token.Keyword.Type: 'storage.type',
    Token.Name: 'variable.other',
    Token.Name.Attribute: 'entity.other.attribute-name',
    Token.Name.Builtin: 'support.function',
    Token.Name.Builtin.Pseudo: 'variable.language.this',
    Token.Name.Class: 'entity.name.type.class',
    Token.Name.Constant: 'variable.other.constant',
    Token.Name.Decorator: 'storage.type.annotation',
    Token.Name.Exception: 'entity.name.type',
    Token.Name.Function: 'entity.name.function',
    Token.Name.Function.Magic: 'entity.name.function',
    Token.Name.Label: 'entity.name.label',
    Token.Name.Namespace: 'entity.name.type.namespace',
    Token.Name.Property: 'variable.other.property',
    Token.Name.Tag: 'entity.name.tag',
    Token.Name.Variable: 'variable.other.local',
    Token.Name.Variable.Instance: 'variable.other.member',
    Token.Name.Variable.Class: 'variable.other.member',
    Token.Name.Variable.Global: 'variable.other.constant',
    Token.Literal.String: 'string.quoted',
    Token.Literal.String.Escape: 'constant.character.escape',
    Token.Literal.String.Regex: 'string.regexp',
    Token.Literal.String.Doc: 'comment.block.documentation',
    Token.Literal.Number: 'constant.numeric',
    Token.Operator: 'keyword.operator',
    Token.Operator.Word: 'keyword.operator',
    Token.Punctuation: 'punctuation',
    Token.Punctuation.Brace: 'punctuation.section.braces',
    Token.Punctuation.Bracket: 'punctuation.section.brackets',
    Token.Punctuation.Paren: 'punctuation.section.parens',
    Token.Punctuation.Comma: 'punctuation.separator.comma',
    Token.Punctuation.Dot: 'punctuation.accessor',
    Token.Punctuation.Semicolon: 'punctuation.terminator.statement',
}

LANGUAGE_SCOPES = {
    'csharp': {
        Token.Name.Class: 'entity.name.type.class',
        Token.Name.Namespace: 'entity.name.type.namespace',
    },
    'sql': {
        Token.Name: 'variable.other',
        Token.Name.Variable: 'variable.parameter',
        Token.Name.Builtin: 'support.function',
        Token.Comment.Single: 'comment.line.double-dash',
    },
    'javascript': {
        Token.Keyword.Constant: 'constant.language.null',
        Token.Keyword.Namespace: 'keyword.control.import',
        Token.Name.Builtin: 'variable.language.this',
    },
    'typescript': {
        Token.Keyword.Constant: 'constant.language.null',
        Token.Keyword.Namespace: 'keyword.control.import',
        Token.Name.Builtin: 'variable.language.this',
    },
    'html': {
        Token.Name.Tag: 'entity.name.tag',
        Token.Name.Attribute: 'entity.other.attribute-name',
    },
    'xml': {
        Token.Name.Tag: 'entity.name.tag',
        Token.Name.Attribute: 'entity.other.attribute-name',
    },
    'css': {
        Token.Keyword: 'support.type.property-name',
        Token.Keyword.Constant: 'support.constant.property-value',
        Token.Keyword.Pseudo: 'entity.other.attribute-name.pseudo-class',
        Token.Name.Builtin: 'support.constant.property-value',
        Token.Name.Class: 'entity.other.attribute-name.class',
        Token.Name.Decorator: 'entity.other.attribute-name.pseudo-class',
        Token.Name.Function: 'support.function',
        Token.Name.Namespace: 'entity.other.attribute-name.id',
        Token.Name.Tag: 'entity.name.tag',
    },
    'json': {
        Token.Name.Tag: 'support.type.property-name',
        Token.Keyword.Constant: 'constant.language',
    },
    'yaml': {
        Token.Name.Tag: 'entity.name.tag',
        Token.Literal.Scalar.Plain: 'string.unquoted',
    },
    'markdown': {
        Token.Text: 'text.html',
        Token.Generic.Heading: 'markup.heading',
        Token.Generic.Subheading: 'markup.heading',
        Token.Generic.Strong: 'markup.bold',
        Token.Generic.Emph: 'markup.italic',
        Token.Generic.Deleted: 'markup.strikethrough',
        Token.Literal.String.Backtick: 'markup.inline.raw',
        Token.Name.Tag: 'string.other.link.title',
        Token.Name.Attribute: 'markup.underline.link',
        Token.Name.Label: 'markup.underline.link',
        Token.Keyword: 'punctuation.definition.list.begin',
    },
    'bash': {
        Token.Name.Builtin: 'support.function.builtin',
    },
}

PUNCTUATION_TYPES = {
    '{': Token.Punctuation.Brace,
    '}': Token.Punctuation.Brace,
    '[': Token.Punctuation.Bracket,
    ']': Token.Punctuation.Bracket,
    '(': Token.Punctuation.Paren,
    ')': Token.Punctuation.Paren,
    ',': Token.Punctuation.Comma,
    '.': Token.Punctuation.Dot,
    ';': Token.Punctuation.Semicolon,
}


class PunctuationFilter(Filter):
    """Splits Punctuation into braces, brackets, parens, commas, dots and semicolons."""

    def filter(self, lexer, stream):
        for ttype, value in stream:
            if ttype is Token.Punctuation and value in PUNCTUATION_TYPES:
                yield PUNCTUATION_TYPES[value], value
            else:
                yield ttype, value


def scope_for(ttype, language: Language):
    overrides = LANGUAGE_SCOPES.get(language.id, {})
    while ttype is not None:
        base = overrides.get(ttype) or TOKEN_SCOPES.get(ttype)
        if base:
            return f"{base}.{language.scope_suffix}" if language.scope_suffix else base
        ttype = ttype.parent
    return None


def match_rule(scope: str, token_rules):
    """
    Most specific rule scope that is a prefix of `scope`; the last rule wins ties.
    """
    best, best_depth = None, 0
    for rule in token_rules:
        for selector in rule.scopes:
            if scope == selector or scope.startswith(selector + '.'):
                depth = selector.count('.') + 1
                if depth >= best_depth:
                    best, best_depth = rule, depth
    return best


def style_definition(rule) -> str:
    words = ['bold' if 'bold' in rule.font_style else 'nobold',
             'italic' if 'italic' in rule.font_style else 'noitalic']
    return " ".join(words + [rule.foreground])


def make_style(theme, language: Language):
    """Builds a Pygments Style class from a theme for one language."""
    token_types = set(STANDARD_TYPES) | set(TOKEN_SCOPES) | set(LANGUAGE_SCOPES.get(language.id, {}))
    styles = {Token: theme.colors.get('editor.foreground', '')}
    for ttype in sorted(token_types):
        if ttype is Token:
            continue
        scope = scope_for(ttype, language)
        rule = match_rule(scope, theme.token_rules) if scope else None
        if rule:
            styles[ttype] = style_definition(rule)

    return type('ThemeStyle', (Style,), {
        'name': theme.name,
        'background_color': theme.colors.get('editor.background', '#ffffff'),
        'highlight_color': theme.colors.get('editor.selectionBackground', '#ffffcc'),
        'default_style': '',
        'styles': styles,
    })


def get_language(language_id: str) -> Language:
    try:
        return language_by_id(language_id)
    except KeyError:
        return Language(language_id, language_id, language_id, language_id, '')


def render(theme, language_id: str, source: str) -> str:
    language = get_language(language_id)
    lexer = get_lexer_by_name(language.lexer, stripnl=False)
    lexer.add_filter(PunctuationFilter())
    formatter = HtmlFormatter(noclasses=True, style=make_style(theme, language))
    logger.debug("Rendering %s sample with %s", language.id, type(lexer).__name__)
    return highlight(source, lexer, formatter)
