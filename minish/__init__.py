"""A small interactive POSIX shell: lexer, parser, executor and built-in commands."""

__version__ = "0.1.0"