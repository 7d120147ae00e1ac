"""Turning a line into processed tokens: expansion, re-splitting, globbing, unquoting."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from .expansion import BadSubstitution, expand_at
from .state import Environment, report
from .tokenizer import Token, TokenType, tokenize, trim_quotes
from .wildcard import AmbiguousRedirect, expand_wildcard


class LexError(Exception):
    """The line could not be turned into tokens; any message is already reported."""


@dataclass
class LexResult:
    """Processed tokens and the token count used to tell empty input from real input."""

    tokens: list[Token]
    count: int


def expand_token(data: str, env: Environment, status: int) -> str:
    """Expand ``$`` references outside single quotes in one word."""
    quote: str | None = None
    i = 0
    while i < len(data):
        c = data[i]
        if quote == "'":
            if c == "'":
                quote = None
        elif c == "$":
            try:
                data, i = expand_at(data, i, quote == '"', env, status)
            except BadSubstitution as exc:
                report(f"{exc}\n")
                i += 1
        elif quote == '"':
            if c == '"':
                quote = None
        elif c in "'\"":
            quote = c
        i += 1
    return data


_REDIRECTS = (TokenType.GREAT, TokenType.LESS)


class _Processor:
    """One pass over a token list."""

    def __init__(self, shell, expanding: bool, redirect_prev: Token | None) -> None:
        self.shell = shell
        self.expanding = expanding
        self.redirect_prev = redirect_prev
        self.pending_plain = 0
        self.count = 0

    def _expand(self, tok: Token, pending: deque, out: list[Token]) -> Token | None:
        if self.pending_plain == 0 and not self.expanding:
            self.redirect_prev = out[-1] if out else None
            expanded = expand_token(tok.data, self.shell.env, self.shell.status)
            if not expanded:
                self.pending_plain += 1
                self.shell.tokdel = True
                return None
            nested = _lex(expanded, self.shell, True, self.redirect_prev)
            if nested.count <= 0:
                raise LexError()
            self.pending_plain = len(nested.tokens)
            self.count += len(nested.tokens)
            pending.extendleft(reversed(nested.tokens[1:]))
            tok = nested.tokens[0]
        if self.pending_plain > 0 and not self.expanding:
            self.pending_plain -= 1
        return tok

    def _glob(self, tok: Token) -> list[Token]:
        redirect = self.redirect_prev is not None and self.redirect_prev.type in _REDIRECTS
        try:
            names = expand_wildcard(tok.data, redirect)
        except AmbiguousRedirect as exc:
            report(f"{exc}\n")
            raise LexError(str(exc)) from exc
        except OSError as exc:
            raise LexError(str(exc)) from exc
        return [Token(name, TokenType.WORD) for name in names]

    def run(self, tokens: list[Token]) -> LexResult:
        pending = deque(tokens)
        out: list[Token] = []
        heredoc = False
        while pending:
            tok = pending.popleft()
            if tok.type == TokenType.WORD:
                if not heredoc:
                    tok = self._expand(tok, pending, out)
                    if tok is None:
                        continue
                    matches = self._glob(tok)
                    if matches:
                        out.extend(matches)
                        self.count += len(matches)
                        continue
                if not self.expanding:
                    tok = Token(trim_quotes(tok.data), tok.type)
                self.count += 1
            prev = out[-1] if out else None
            heredoc = (
                prev is not None
                and prev.type == TokenType.LESS
                and tok.type == TokenType.LESS
            )
            out.append(tok)
        return LexResult(out, self.count)


def _lex(line: str, shell, expanding: bool, redirect_prev: Token | None) -> LexResult:
    if not expanding:
        shell.tokdel = False
    tokens = tokenize(line)
    if not tokens:
        return LexResult([], 0)
    return _Processor(shell, expanding, redirect_prev).run(tokens)


def process_tokens(tokens: list[Token], shell, expanding: bool = False) -> LexResult:
    """Expand, glob and unquote the words of ``tokens``; raise LexError on failure.

    With ``expanding`` set, the tokens come from an expanded value: they are
    globbed but neither expanded again nor unquoted.
    """
    return _Processor(shell, expanding, None).run(list(tokens))


def lex(line: str, shell) -> LexResult:
    """Tokenize and process one input line; a zero count means nothing usable."""
    return _lex(line, shell, False, None)