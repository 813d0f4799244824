import pytest

from minishell.lexer import tokenize
from minishell.syntax import ShellSyntaxError, check_syntax, check_tokens


def test_leading_pipe_rejected():
    line = "   | ls"
    with pytest.raises(ShellSyntaxError) as info:
        check_syntax(line, tokenize(line).tokens)
    assert str(info.value) == "syntax error near unexpected token `|'"


@pytest.mark.parametrize("line", ["ls >", "cat <", "echo >>", "cat <<", "ls > | wc"])
def test_redirection_needs_word(line):
    with pytest.raises(ShellSyntaxError) as info:
        check_syntax(line, tokenize(line).tokens)
    assert str(info.value) == "syntax error near unexpected token `newline'"


def test_trailing_pipe_rejected():
    line = "ls |"
    with pytest.raises(ShellSyntaxError) as info:
        check_syntax(line, tokenize(line).tokens)
    assert str(info.value) == "syntax error near unexpected token "


def test_check_tokens_ignores_leading_pipe_rule():
    # Only check_syntax looks at the raw line; a pipe in the middle is fine.
    tokens = tokenize("| ls").tokens
    with pytest.raises(ShellSyntaxError):
        check_syntax("| ls", tokens)
    assert check_tokens(tokens) is None


def test_double_pipe_in_middle_not_trailing():
    tokens = tokenize("a || b").tokens
    assert check_tokens(tokens) is None
    with pytest.raises(ShellSyntaxError):
        check_tokens(tokenize("a || ").tokens)