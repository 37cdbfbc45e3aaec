from pygments.token import Token

from schemesync.builder import ThemeDocument, TokenRule, build
from schemesync.colors import StyleFlag
from schemesync.mapping import Language
from schemesync.renderer import (
    PunctuationFilter, get_language, make_style, match_rule, render, scope_for, style_definition,
)

CSHARP = Language('csharp', 'C#', 'C#', 'csharp', 'cs')


def rule(scopes, foreground, style=StyleFlag.NORMAL, key=None):
    return TokenRule(scopes[0], tuple(scopes), foreground, style, key)


def test_scope_for_appends_language_suffix():
    assert scope_for(Token.Keyword, CSHARP) == 'keyword.cs'
    assert scope_for(Token.Comment.Multiline, CSHARP) == 'comment.block.cs'


def test_scope_for_walks_to_parent_type():
    assert scope_for(Token.Keyword.Declaration.Something, CSHARP) == 'storage.modifier.cs'
    assert scope_for(Token.Text, CSHARP) is None


def test_scope_for_language_overrides():
    sql = get_language('sql')
    assert scope_for(Token.Name.Variable, sql) == 'variable.parameter.sql'


def test_match_rule_prefers_most_specific_selector():
    general = rule(['keyword'], '#111111')
    operator = rule(['keyword.operator'], '#222222')
    assert match_rule('keyword.operator.cs', [operator, general]) is operator
    assert match_rule('keyword.control.cs', [operator, general]) is general


def test_match_rule_last_rule_wins_ties():
    first = rule(['entity.name.function'], '#111111')
    second = rule(['entity.name.function', 'meta.function'], '#222222')
    assert match_rule('entity.name.function.cs', [first, second]) is second


def test_match_rule_needs_whole_segments():
    assert match_rule('keywords', [rule(['keyword'], '#111111')]) is None


def test_style_definition_blocks_inheritance():
    assert style_definition(rule(['keyword'], '#111111', StyleFlag.BOLD)) == 'bold noitalic #111111'
    assert style_definition(rule(['comment'], 'var(--token-x)')) == 'nobold noitalic var(--token-x)'


def test_punctuation_filter():
    stream = [(Token.Punctuation, '{'), (Token.Punctuation, '::'), (Token.Name, '.')]
    assert list(PunctuationFilter().filter(None, stream)) == [
        (Token.Punctuation.Brace, '{'),
        (Token.Punctuation, '::'),
        (Token.Name, '.'),
    ]


def test_make_style_uses_theme_colors():
    theme = ThemeDocument('T', 'dark', {'editor.background': '#101010', 'editor.foreground': '#EEEEEE'},
                          [rule(['keyword'], '#C792EA', StyleFlag.BOLD)])
    style = make_style(theme, CSHARP)
    assert style.background_color == '#101010'
    assert style.style_for_token(Token.Keyword)['color'] == 'C792EA'
    assert style.style_for_token(Token.Keyword)['bold']


def test_render_colors_tokens(scheme_xml):
    markup = render(build(scheme_xml), 'csharp', 'public class Foo { }\n')
    assert 'color: #C792EA' in markup
    assert 'background: #1F2B30' in markup


def test_render_css_variables():
    theme = ThemeDocument('T', 'dark', {}, [rule(['keyword'], 'var(--token-K)', key='K')])
    assert 'var(--token-K)' in render(theme, 'csharp', 'return 1;\n')


def test_unknown_language_uses_lexer_name():
    language = get_language('python')
    assert language.lexer == 'python'
    assert language.scope_suffix == ''
