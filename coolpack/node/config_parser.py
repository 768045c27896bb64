"""Reading property values out of JavaScript and TypeScript config files.

The scanner tokenizes the source, skipping comments, strings, template
literals and regular expressions, then walks the tokens in document order
looking for object-literal pairs such as ``output: 'export'``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_IDENT = re.compile(r"[A-Za-z_$\u0080-\uffff][\w$\u0080-\uffff]*")
_NUMBER = re.compile(r"\d[\w.]*|\.\d[\w.]*")
_OPERATOR = re.compile(
    r"===|!==|\?\?=|\.\.\.|==|!=|=>|<=|>=|&&|\|\||\?\?|\?\.(?!\d)"
    r"|\*\*|\+\+|--|\+=|-=|\*=|/=|\S"
)
_OPENERS = frozenset("([{")
_CLOSERS = {")": "(", "]": "[", "}": "{"}
_REGEX_KEYWORDS = frozenset(
    {
        "return", "typeof", "case", "do", "else", "in", "of", "new",
        "delete", "void", "throw", "instanceof", "yield", "await",
    }
)
_KEY_KINDS = frozenset({"name", "string", "number"})


@dataclass(frozen=True)
class _Token:
    kind: str
    text: str
    start: int
    end: int

    def is_punct(self, *texts: str) -> bool:
        return self.kind == "punct" and self.text in texts


def trim_quotes(s: str) -> str:
    """Remove one pair of matching single or double quotes around a string."""
    if len(s) >= 2 and s[0] == s[-1] and s[0] in "\"'":
        return s[1:-1]
    return s


def find_property_value(source: bytes | str, property_name: str) -> str:
    """Return the text of the first value assigned to a property, unquoted, or ""."""
    scan = _Scan(_decode(source))
    span = scan.search(property_name, 0, len(scan.tokens), identifiers=True)
    return trim_quotes(scan.text(*span)) if span else ""


def find_nested_property_value(source: bytes | str, *args: str) -> str:
    """Follow a property path such as ("server", "preset") and return its value, or ""."""
    if not args:
        return ""
    scan = _Scan(_decode(source))
    lo, hi = 0, len(scan.tokens)
    for key in args:
        span = scan.search(key, lo, hi, identifiers=False)
        if span is None:
            return ""
        lo, hi = span
    return trim_quotes(scan.text(lo, hi))


def _decode(source: bytes | str) -> str:
    if isinstance(source, bytes):
        return source.decode("utf-8", errors="replace")
    return source


class _Scan:
    """Tokens of a source file with the bracket each token sits inside."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.tokens = _tokenize(source)
        self.enclosing: list[str] = []
        stack: list[str] = []
        for tok in self.tokens:
            if tok.kind == "punct" and tok.text in _CLOSERS and stack:
                stack.pop()
            self.enclosing.append(stack[-1] if stack else "")
            if tok.kind == "punct" and tok.text in _OPENERS:
                stack.append(tok.text)

    def text(self, lo: int, hi: int) -> str:
        return self.source[self.tokens[lo].start : self.tokens[hi - 1].end]

    def search(
        self, name: str, lo: int, hi: int, *, identifiers: bool
    ) -> tuple[int, int] | None:
        for index, tok in enumerate(self.tokens[lo:hi], start=lo):
            value = self._pair_value(index)
            if value is not None:
                if trim_quotes(tok.text) == name:
                    return value
                continue
            if identifiers and tok.kind == "name" and tok.text == name and self._has_sibling(index):
                return index + 1, index + 2
        return None

    def _pair_value(self, index: int) -> tuple[int, int] | None:
        tokens = self.tokens
        tok = tokens[index]
        if tok.kind not in _KEY_KINDS or index == 0 or index + 2 >= len(tokens):
            return None
        if self.enclosing[index] != "{":
            return None
        if not tokens[index - 1].is_punct("{", ",") or not tokens[index + 1].is_punct(":"):
            return None
        start = index + 2
        end = self._value_end(start)
        return (start, end) if end > start else None

    def _value_end(self, lo: int) -> int:
        depth = 0
        for index, tok in enumerate(self.tokens[lo:], start=lo):
            if tok.kind != "punct":
                continue
            if tok.text in _OPENERS:
                depth += 1
            elif tok.text in _CLOSERS:
                if depth == 0:
                    return index
                depth -= 1
            elif tok.text == "," and depth == 0:
                return index
        return len(self.tokens)

    def _has_sibling(self, index: int) -> bool:
        tokens = self.tokens
        if index + 1 >= len(tokens):
            return False
        following = tokens[index + 1]
        if following.kind == "punct" and (following.text in _CLOSERS or following.text == ";"):
            return False
        if index > 0 and tokens[index - 1].is_punct(".", "?."):
            return False
        if following.is_punct(",") and self.enclosing[index] == "{":
            return False
        return True


def _tokenize(source: str) -> list[_Token]:
    tokens: list[_Token] = []
    i, n = 0, len(source)
    while i < n:
        ch = source[i]
        if ch.isspace():
            i += 1
            continue
        if source.startswith("//", i):
            newline = source.find("\n", i)
            i = n if newline < 0 else newline
            continue
        if source.startswith("/*", i):
            close = source.find("*/", i + 2)
            i = n if close < 0 else close + 2
            continue
        if ch in "'\"":
            kind, end = "string", _string_end(source, i, ch)
        elif ch == "`":
            kind, end = "template", _template_end(source, i)
        elif ch == "/" and _regex_allowed(tokens):
            kind, end = "regex", _regex_end(source, i)
        elif match := _IDENT.match(source, i):
            kind, end = "name", match.end()
        elif match := _NUMBER.match(source, i):
            kind, end = "number", match.end()
        else:
            match = _OPERATOR.match(source, i)
            kind, end = "punct", match.end() if match else i + 1
        tokens.append(_Token(kind, source[i:end], i, end))
        i = end
    return tokens


def _string_end(source: str, i: int, quote: str) -> int:
    j = i + 1
    while j < len(source):
        c = source[j]
        if c == "\\":
            j += 2
            continue
        if c == quote:
            return j + 1
        if c == "\n":
            return j
        j += 1
    return len(source)


def _template_end(source: str, i: int) -> int:
    j = i + 1
    depth = 0
    while j < len(source):
        c = source[j]
        if c == "\\":
            j += 2
            continue
        if depth == 0:
            if c == "`":
                return j + 1
            if source.startswith("${", j):
                depth = 1
                j += 2
                continue
        elif c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
        elif c == "`":
            j = _template_end(source, j)
            continue
        elif c in "'\"":
            j = _string_end(source, j, c)
            continue
        j += 1
    return len(source)


def _regex_end(source: str, i: int) -> int:
    j = i + 1
    in_class = False
    n = len(source)
    while j < n:
        c = source[j]
        if c == "\\":
            j += 2
            continue
        if c == "\n":
            return j
        if in_class:
            if c == "]":
                in_class = False
        elif c == "[":
            in_class = True
        elif c == "/":
            j += 1
            while j < n and (source[j].isalnum() or source[j] in "_$"):
                j += 1
            return j
        j += 1
    return n


def _regex_allowed(tokens: list[_Token]) -> bool:
    if not tokens:
        return True
    last = tokens[-1]
    if last.kind == "name":
        return last.text in _REGEX_KEYWORDS
    if last.kind != "punct":
        return False
    return last.text not in (")", "]", "}")