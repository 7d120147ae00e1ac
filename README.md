# minish

A small interactive shell for POSIX systems. It reads a line, splits it
into tokens, builds a syntax tree and runs it, much like a familiar Unix
shell but with a deliberately small feature set.

## Features

- Simple commands, looked up on `PATH`. A name that starts with `/`,
  `./`, `../` or `~/` is run as written, without a search.
- Pipelines: `ls | grep py | wc -l`
- Lists: `make && ./run`, `test -f x || echo missing`, `a ; b`
- Grouping with parentheses: `(false || true) && echo ok`
- Redirections: `<`, `>`, `>>` and here-documents with `<<`
- Single and double quotes, and backslash escapes
- Variable expansion: `$NAME`, `${NAME}` and `$?`, the last exit status.
  Nothing is expanded inside single quotes.
- Wildcards `*` and `?`, matched against the current directory. Hidden
  files are left out unless the pattern starts with a dot. A redirection
  target that matches more than one file is an "ambiguous redirect".
- Built-in commands: `echo` (with `-n`), `cd` (with `-`, `~` and `~/...`),
  `pwd`, `export`, `unset`, `env` and `exit`
- Lines whose first non-blank character is `#` are ignored
- A start-up file, `~/.minishrc`, whose lines run before the first prompt

## Installing

```
pip install .
```

## Using

Start an interactive session:

```
minish
```

The prompt shows the name of the current directory, or `~` when you are
in your home directory. Press Ctrl-D to leave; the shell prints `exit`
and exits with the status of the last command.

Run a single command line and exit with its status:

```
minish -c 'echo $HOME && ls *.py | wc -l'
```

If `-c` has no argument, the shell exits with status 2. Any other
argument makes it exit with status 127.

## Exit statuses

- A command that cannot be found gives status 127.
- A command ended by a signal gives 128 plus the signal number, and the
  signal's description is shown, for example `Segmentation fault`.
- Ctrl-C at the prompt sets the status to 130.
- `exit N` leaves with `N` modulo 256; `exit` with a non-numeric argument
  leaves with 2.

## Using it from Python

```python
from minish.shell import init_shell, handle_line

shell = init_shell()
handle_line(shell, "export GREETING=hello")
handle_line(shell, "echo $GREETING")
print(shell.status)
```

Variables are expanded when a line is read, before any of it runs, so a
variable exported on a line is only seen by later lines.

`init_shell()` takes an optional mapping to use as the starting
environment instead of `os.environ`; it raises `SHLVL` by one and runs
`~/.minishrc`. `main(argv)` in `minish.shell` is what the `minish`
command calls and returns the exit status.

## What it does not do

- No background jobs or job control: a single `&` is not an operator.
- No command substitution, arithmetic, functions, loops or conditionals.
- No `~` expansion in arguments; only `cd` understands `~`.
- Commands are started with `fork`, so the shell runs on POSIX systems
  only.

## Running the tests

```
pip install .[test]
pytest
```