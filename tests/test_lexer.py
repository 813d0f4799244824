import pytest

from minishell.lexer import (
    UNCLOSED_QUOTE_MESSAGE,
    Token,
    TokenType,
    classify_operator,
    tokenize,
)


def values(line):
    return [token.value for token in tokenize(line).tokens]


def types(line):
    return [token.type for token in tokenize(line).tokens]


def test_simple_pipeline():
    result = tokenize("echo hello | wc")
    assert result.error is None
    assert [t.value for t in result.tokens] == ["echo", "hello", "|", "wc"]
    assert [t.type for t in result.tokens] == [
        TokenType.WORD,
        TokenType.WORD,
        TokenType.PIPE,
        TokenType.WORD,
    ]


@pytest.mark.parametrize(
    "line, kind, text",
    [
        (">> out", TokenType.REDIR_APPEND, ">>"),
        ("<< EOF", TokenType.REDIR_HEREDOC, "<<"),
        ("< in", TokenType.REDIR_IN, "<"),
        ("> out", TokenType.REDIR_OUT, ">"),
    ],
)
def test_operators(line, kind, text):
    first = tokenize(line).tokens[0]
    assert first == Token(text, kind)


def test_operator_without_spaces_splits_words():
    assert values("cat<in>>out") == ["cat", "<", "in", ">>", "out"]


def test_blanks_are_skipped():
    assert values("  ls\t-l  ") == ["ls", "-l"]


def test_quoted_word_keeps_inner_text_and_quote():
    tokens = tokenize('echo "a b"').tokens
    assert tokens[1] == Token("a b", TokenType.WORD, quote='"')


def test_single_quote_recorded():
    tokens = tokenize("'$HOME'").tokens
    assert tokens == [Token("$HOME", TokenType.WORD, quote="'")]


def test_quote_inside_word_is_part_of_word():
    assert values('a"b c"') == ['a"b', 'c"']


def test_quoted_then_word_are_separate_tokens():
    assert values('"a"b') == ["a", "b"]


def test_unclosed_quote_reports_error_and_keeps_prior_tokens():
    result = tokenize('echo "abc')
    assert result.error == UNCLOSED_QUOTE_MESSAGE
    assert [t.value for t in result.tokens] == ["echo"]


def test_empty_line_has_no_tokens():
    result = tokenize("")
    assert result.tokens == []
    assert result.error is None


def test_classify_operator_spans():
    assert classify_operator("a>>b", 1) == (TokenType.REDIR_APPEND, 2)
    assert classify_operator("a<<b", 1) == (TokenType.REDIR_HEREDOC, 2)
    assert classify_operator("a|b", 1) == (TokenType.PIPE, 1)
    assert classify_operator("x", 0) == (TokenType.WORD, 0)


def test_redirection_property():
    tokens = tokenize("a > b | c << d").tokens
    assert [t.type.is_redirection for t in tokens] == [
        False,
        True,
        False,
        False,
        False,
        True,
        False,
    ]


def test_unquoted_words_have_no_quote():
    assert all(token.quote is None for token in tokenize("a b | c").tokens)