"""Splitting an input line into words and operator characters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class TokenType(IntEnum):
    """Character classes and token kinds; operators keep their character code."""

    WORD = -1
    GENERAL = -1
    NULL = 0
    TAB = ord("\t")
    NEWLINE = ord("\n")
    SPACE = ord(" ")
    DQUOTE = ord('"')
    DOLLAR = ord("$")
    AMP = ord("&")
    QUOTE = ord("'")
    OPEN_PAREN = ord("(")
    CLOSE_PAREN = ord(")")
    SEMICOLON = ord(";")
    LESS = ord("<")
    GREAT = ord(">")
    QUESTION = ord("?")
    ESCAPE = ord("\\")
    OPEN_CURLY = ord("{")
    PIPE = ord("|")
    CLOSE_CURLY = ord("}")


_CHAR_TYPES = {
    "'": TokenType.QUOTE,
    '"': TokenType.DQUOTE,
    "|": TokenType.PIPE,
    "&": TokenType.AMP,
    " ": TokenType.SPACE,
    ";": TokenType.SEMICOLON,
    "\\": TokenType.ESCAPE,
    "\t": TokenType.TAB,
    "\n": TokenType.NEWLINE,
    ">": TokenType.GREAT,
    "<": TokenType.LESS,
    "": TokenType.NULL,
    "\0": TokenType.NULL,
    "{": TokenType.OPEN_CURLY,
    "}": TokenType.CLOSE_CURLY,
    "(": TokenType.OPEN_PAREN,
    ")": TokenType.CLOSE_PAREN,
}

# Opening character class -> class of the character that closes it.
_OPENERS = {
    TokenType.QUOTE: TokenType.QUOTE,
    TokenType.DQUOTE: TokenType.DQUOTE,
    TokenType.OPEN_CURLY: TokenType.CLOSE_CURLY,
}

_OPERATORS = frozenset(
    {
        TokenType.SEMICOLON,
        TokenType.GREAT,
        TokenType.LESS,
        TokenType.AMP,
        TokenType.PIPE,
        TokenType.OPEN_PAREN,
        TokenType.CLOSE_PAREN,
    }
)


@dataclass
class Token:
    """A word (``WORD``), a single operator character, or an empty ``NULL`` tail."""

    data: str
    type: TokenType


def char_type(c: str) -> TokenType:
    """Class of one character; anything unlisted is ``GENERAL``."""
    return _CHAR_TYPES.get(c, TokenType.GENERAL)


def trim_quotes(text: str) -> str:
    """Drop the outermost pair of each quoted section, keeping nested quotes."""
    if len(text) <= 1:
        return text
    quote: str | None = None
    kept = []
    for c in text:
        if quote is None and c in "'\"":
            quote = c
        elif c == quote:
            quote = None
        else:
            kept.append(c)
    return "".join(kept)


def tokenize(line: str) -> list[Token]:
    """Split ``line`` into tokens.

    Quoted and braced sections stay inside their word with their delimiters.
    A backslash takes the next character literally. Newlines and stray ``}``
    are dropped. The last token is an empty ``NULL`` one unless the line ends
    inside a word.
    """
    line = line.split("\0", 1)[0]
    if not line:
        return []
    tokens: list[Token] = []
    word: list[str] = []
    closing: TokenType | None = None

    def finish() -> None:
        kind = TokenType.WORD if word else TokenType.NULL
        tokens.append(Token("".join(word), kind))
        word.clear()

    chars = iter(line)
    for c in chars:
        kind = char_type(c)
        if closing is not None:
            word.append(c)
            if kind == closing:
                closing = None
        elif kind in _OPENERS:
            closing = _OPENERS[kind]
            word.append(c)
        elif kind == TokenType.ESCAPE:
            word.append(next(chars, ""))
        elif kind == TokenType.GENERAL:
            word.append(c)
        elif kind in (TokenType.SPACE, TokenType.TAB):
            if word:
                finish()
        elif kind in _OPERATORS:
            if word:
                finish()
            tokens.append(Token(c, kind))
    finish()
    return tokens