"""Wildcard detection and matching for ``*`` and ``?`` with quoted sections."""

from __future__ import annotations

_QUOTES = "'\""


def contains_wildcard(text: str) -> bool:
    """True when ``text`` has a ``*`` or ``?`` outside quotes."""
    quote: str | None = None
    for c in text:
        if quote is None:
            if c in _QUOTES:
                quote = c
            elif c in "*?":
                return True
        elif c == quote:
            quote = None
    return False


class _Matcher:
    """One match attempt; the quote state carries over between fragments."""

    def __init__(self, pattern: str, target: str) -> None:
        self.pattern = pattern
        self.target = target
        self.end = len(target)
        self.quote: str | None = None

    def _at(self, index: int) -> str:
        return self.pattern[index] if index < len(self.pattern) else ""

    def fragment(self, f: int, t: int) -> tuple[int, int] | None:
        """Match pattern from ``f`` against target from ``t`` up to the next ``*``."""
        while self._at(f) and (self._at(f) != "*" or self.quote) and t < self.end:
            c = self._at(f)
            if self.quote is None and c in _QUOTES:
                self.quote = c
                f += 1
            if self.quote and self._at(f) == self.quote:
                self.quote = None
                f += 1
                if self._at(f) == "*":
                    break
            c = self._at(f)
            if c == "?" and self.quote is None:
                f += 1
            else:
                if c != self.target[t]:
                    return None
                f += 1
            t += 1
        c = self._at(f)
        if not c or (c == "*" and self.quote is None):
            return f, t
        return None

    def match(self) -> bool:
        f = t = 0
        if self._at(0) != "*":
            found = self.fragment(0, 0)
            if found is None:
                return False
            f, t = found
        while self._at(f):
            while self._at(f) == "*":
                f += 1
            if not self._at(f):
                return True
            while t < self.end:
                start_f, start_t = f, t
                found = self.fragment(f, t)
                if found is not None:
                    f, t = found
                    if not self._at(f) and t != self.end:
                        # The last fragment has to sit at the end of the target.
                        t = self.end - (t - start_t)
                        return self.fragment(start_f, t) is not None
                    break
                t += 1
            else:
                return False
        return t == self.end


def wildcard_match(pattern: str, target: str) -> bool:
    """Whether ``target`` matches ``pattern``."""
    return _Matcher(pattern, target).match()