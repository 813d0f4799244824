# minishell

A small interactive command shell. It reads a line and splits it into words,
operators and quoted strings. It expands `$NAME` and `$?`, checks the line for
syntax errors and then runs the commands, which can be joined with pipes.

## Installing

```
pip install .
```

## Running

```
minishell
```

The prompt is a coloured `minishell$ `. Press Ctrl-D at the prompt to leave the
shell. It prints `exit` as it stops. The `exit` built-in also ends the shell,
with the status it is given. Line editing and history come from Python's
`readline` module when that module is available.

At startup the shell copies the environment it was started with and adds one
to `SHLVL`. If it starts with an empty environment, it creates `PWD`, `SHLVL=1`
and `_=/usr/bin/env`.

## What it understands

- Words, plus `'single'` and `"double"` quoted strings. A quoted string is one
  word. No expansion happens inside single quotes. An unclosed quote ends the
  line at that point.
- `$NAME` expands to the value of the variable. An unknown variable expands to
  nothing. `$?` expands to the exit status of the last command.
- Pipes: `ls | grep py | wc -l`. The status of the line is the status of the
  last command.
- Redirections: `< infile`, `> outfile`, `>> outfile`, and here-documents with
  `<< LIMITER`.
  - Every output file named is created in order, and only the last one
    receives the output.
  - If any `>>` appears in a command, all of its output files are opened for
    appending.
  - A here-document takes precedence over `<`.
  - Here-document lines are read at a `> ` prompt and expanded.
- Built-in commands:
  - `echo` (one or more `-n` options drop the newline)
  - `cd` (with no argument, `~` or `~/path`; updates `PWD` and `OLDPWD`)
  - `pwd`
  - `env`
  - `export` (with no arguments it lists the variables sorted as
    `declare -x NAME="value"`)
  - `unset` (removes the first variable whose name starts with its argument)
  - `exit`

  A built-in that runs inside a pipeline works on a copy of the environment, so
  its changes do not last.

Any other command is looked up in the directories listed in `PATH` and started
as a child process. If it cannot be started, the shell prints
`minishell: NAME: command not found` and the status becomes 127.

Syntax errors are reported, and the line is not run, in these cases:

- the line starts with a pipe
- a redirection is not followed by a word
- the line ends with a pipe

## What it does not do

The shell has no `;`, `&&` or `||` lists, no subshells or grouping, no
wildcard expansion, no job control and no signal handling of its own. It has
no scripts and no command-line options: the arguments given to `minishell` are
ignored.

## Using it from Python

The parts of the shell can also be used on their own:

```python
from minishell.environment import Environment
from minishell.expansion import expand_tokens, strip_quotes
from minishell.lexer import tokenize
from minishell.parser import parse
from minishell.syntax import check_syntax

env = Environment.from_strings(["USER=demo", "PATH=/usr/bin:/bin"])
line = 'echo "hello $USER" | wc -c'
tokens = expand_tokens(strip_quotes(tokenize(line).tokens), env)
check_syntax(line, tokens)           # raises ShellSyntaxError on bad input
for command in parse(tokens):
    print(command.args)              # ['echo', 'hello demo'], then ['wc', '-c']
```

- `minishell.shell.run_line(line, env, read_line=None)` takes one line through
  every step, from tokenizing to execution, and returns the exit status. It
  raises `minishell.builtins.ShellExit` when the line runs `exit`.
- `minishell.executor.execute(commands, env, read_line=None)` runs parsed
  commands. `read_line` is called with the prompt to read here-document
  lines, and returns `None` at end of input. It defaults to `input()`.
- `minishell.builtins.run_builtin(args, env, out, err)` runs a built-in
  against any text streams.

## Tests

```
pip install .[test]
pytest
```