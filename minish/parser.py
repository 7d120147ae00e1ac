"""Recursive-descent parser that turns processed tokens into a syntax tree.

Grammar::

    command line : and_or ';' command line | and_or ';' | and_or
    and_or       : job '&&' and_or | job '||' and_or | job
                 | '(' command line ')' '&&' and_or
                 | '(' command line ')' '||' and_or
                 | '(' command line ')'
    job          : '(' command ')' '|' job | command '|' job
                 | '(' command ')' | command
    command      : token list
    token list   : name token list | redir token list | word token list | empty
    redir        : '<<' file | '<' file | '>>' file | '>' file

Alternatives are tried in order, each from the same starting token. A failed
alternative still moves past the token it looked at, so the position left
behind by a failed parse is where a syntax error is reported.
"""

from __future__ import annotations

from typing import Callable, Iterable

from .ast import Node, NodeType, insert_and_or
from .state import report
from .tokenizer import Token, TokenType


class ParseError(Exception):
    """Tokens left over after the longest command line; already reported."""

    def __init__(self, near: str) -> None:
        super().__init__(f"syntax error near: {near}")
        self.near = near


class Parser:
    """Parser over one token list."""

    def __init__(self, tokens: Iterable[Token]) -> None:
        self.tokens = list(tokens)
        self.pos = 0
        self._ao: Node | None = None
        self._cmd: Node | None = None

    # -- token access -------------------------------------------------------

    def _current(self) -> Token | None:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def _term(self, kind: TokenType) -> Token | None:
        """Consume the current token; return it only if it has ``kind``."""
        tok = self._current()
        if tok is None:
            return None
        self.pos += 1
        return tok if tok.type == kind else None

    def _terms(self, *kinds: TokenType) -> bool:
        return all(self._term(kind) is not None for kind in kinds)

    def _first(self, *alternatives: Callable[[], Node | None]) -> Node | None:
        save = self.pos
        for alternative in alternatives:
            self.pos = save
            node = alternative()
            if node is not None:
                return node
        return None

    # -- entry point --------------------------------------------------------

    def parse(self) -> Node | None:
        """The whole tree, or None when there is nothing to run.

        Reports and raises ParseError when tokens remain unparsed.
        """
        self.pos = 0
        self._ao = None
        tree = self.command_line()
        tok = self._current()
        if tok is not None and tok.type != TokenType.NULL:
            report(f"error: syntax error near: {tok.data}\n")
            raise ParseError(tok.data)
        return tree

    # -- command line -------------------------------------------------------

    def command_line(self) -> Node | None:
        """``and_or ; command line``, ``and_or ;`` or ``and_or``."""
        return self._first(self._sequence, self._terminated, self.and_or)

    def and_or(self) -> Node | None:
        """Parse an and/or list from scratch and return its root."""
        self._ao = None
        self._and_or()
        return self._ao

    def _sequence(self) -> Node | None:
        first = self.and_or()
        if first is None or self._term(TokenType.SEMICOLON) is None:
            return None
        rest = self.command_line()
        if rest is None:
            return None
        return Node(NodeType.SEQ, left=first, right=rest)

    def _terminated(self) -> Node | None:
        first = self.and_or()
        if first is None or self._term(TokenType.SEMICOLON) is None:
            return None
        return Node(NodeType.SEQ, left=first)

    # -- and / or -----------------------------------------------------------

    def _and_or(self) -> Node | None:
        return self._first(
            lambda: self._job_then(TokenType.AMP, NodeType.AND),
            lambda: self._job_then(TokenType.PIPE, NodeType.OR),
            self._single_job,
            lambda: self._group_then(TokenType.AMP, NodeType.AND),
            lambda: self._group_then(TokenType.PIPE, NodeType.OR),
            self._group,
        )

    def _chain(self, kind: NodeType, left: Node) -> Node:
        node = Node(kind, left=left)
        self._ao = insert_and_or(self._ao, node, False)
        return node

    def _job_then(self, op: TokenType, kind: NodeType) -> Node | None:
        job = self.job()
        if job is None or not self._terms(op, op):
            return None
        node = self._chain(kind, job)
        if self._and_or() is None:
            return None
        return node

    def _single_job(self) -> Node | None:
        job = self.job()
        if job is None:
            return None
        self._ao = insert_and_or(self._ao, job, True)
        return job

    def _subshell(self) -> Node | None:
        save = self._ao
        inner = self.command_line()
        self._ao = save
        return inner

    def _group_then(self, op: TokenType, kind: NodeType) -> Node | None:
        if self._term(TokenType.OPEN_PAREN) is None:
            return None
        inner = self._subshell()
        if inner is None or not self._terms(TokenType.CLOSE_PAREN, op, op):
            return None
        node = self._chain(kind, inner)
        if self._and_or() is None:
            return None
        return node

    def _group(self) -> Node | None:
        if self._term(TokenType.OPEN_PAREN) is None:
            return None
        inner = self._subshell()
        if inner is None or self._term(TokenType.CLOSE_PAREN) is None:
            return None
        self._ao = insert_and_or(self._ao, inner, True)
        return inner

    # -- jobs ---------------------------------------------------------------

    def job(self) -> Node | None:
        """A command or a pipeline of commands, each optionally in parentheses."""
        return self._first(
            lambda: self._pipe(parenthesized=True),
            lambda: self._pipe(parenthesized=False),
            self._parenthesized_command,
            self.command,
        )

    def _pipe(self, parenthesized: bool) -> Node | None:
        if parenthesized and self._term(TokenType.OPEN_PAREN) is None:
            return None
        cmd = self.command()
        if cmd is None:
            return None
        if parenthesized and self._term(TokenType.CLOSE_PAREN) is None:
            return None
        if self._term(TokenType.PIPE) is None:
            return None
        rest = self.job()
        if rest is None:
            return None
        return Node(NodeType.PIPE, left=cmd, right=rest)

    def _parenthesized_command(self) -> Node | None:
        if self._term(TokenType.OPEN_PAREN) is None:
            return None
        cmd = self.command()
        if cmd is None or self._term(TokenType.CLOSE_PAREN) is None:
            return None
        return cmd

    # -- simple commands ----------------------------------------------------

    def command(self) -> Node | None:
        """A CMD node with words on the right chain and redirections on the left."""
        node = Node(NodeType.CMD)
        self._cmd = node
        self._token_list()
        if node.data is None and node.left is None and node.right is None:
            return None
        return node

    def _token_list(self) -> Node | None:
        return self._first(self._name, self._redirect_item, self._argument, lambda: None)

    def _name(self) -> Node | None:
        cmd = self._cmd
        if cmd is None or cmd.data is not None:
            return None
        tok = self._term(TokenType.WORD)
        if tok is None:
            return None
        cmd.set_data(tok.data)
        self._token_list()
        return cmd

    def _redirect_item(self) -> Node | None:
        cmd = self._cmd
        node = self.redirection()
        if node is None:
            return None
        self._token_list()
        cmd.insert(node, False)
        return node

    def _argument(self) -> Node | None:
        cmd = self._cmd
        tok = self._term(TokenType.WORD)
        if tok is None:
            return None
        node = Node(NodeType.ARG)
        node.set_data(tok.data)
        self._token_list()
        cmd.insert(node, True)
        return node

    # -- redirections -------------------------------------------------------

    def redirection(self) -> Node | None:
        """One of ``<< word``, ``< word``, ``>> word`` or ``> word``."""
        return self._first(
            lambda: self._first(
                lambda: self._redirect(TokenType.LESS, 2, NodeType.RD_HDOC),
                lambda: self._redirect(TokenType.LESS, 1, NodeType.RD_INFILE),
            ),
            lambda: self._first(
                lambda: self._redirect(TokenType.GREAT, 2, NodeType.RD_APPEND),
                lambda: self._redirect(TokenType.GREAT, 1, NodeType.RD_TRUNC),
            ),
        )

    def _redirect(self, op: TokenType, count: int, kind: NodeType) -> Node | None:
        if not self._terms(*([op] * count)):
            return None
        target = self._term(TokenType.WORD)
        if target is None:
            return None
        node = Node(kind)
        node.set_data(target.data)
        return node


def parse(tokens: Iterable[Token]) -> Node | None:
    """Parse ``tokens`` into a tree; reports and raises ParseError on bad syntax."""
    return Parser(tokens).parse()