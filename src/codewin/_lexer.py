"""Single-line Python tokenizer for the code window."""

from __future__ import annotations

import re
import string
from enum import Enum
from typing import NamedTuple


class ColorTag(Enum):
    KEYWORD = "keyword"
    BUILTIN = "builtin"
    STRING = "string"
    NUMBER = "number"
    SELF = "self"
    ATTRIBUTE = "attribute"
    TYPE_NAME = "type-name"
    CALLABLE = "callable"
    DUNDER = "dunder"
    DECORATOR = "decorator"
    COMMENT = "comment"
    DEFAULT = "default"


class Segment(NamedTuple):
    text: str
    tag: ColorTag


KEYWORDS = frozenset({
    "False", "None", "True", "and", "as", "assert", "async", "await",
    "break", "class", "continue", "def", "del", "elif", "else", "except",
    "finally", "for", "from", "global", "if", "import", "in", "is",
    "lambda", "nonlocal", "not", "or", "pass", "raise", "return", "try",
    "while", "with", "yield", "match", "case",
})

BUILTINS = frozenset({
    "abs", "all", "any", "bin", "bool", "bytearray", "bytes", "callable",
    "chr", "classmethod", "compile", "complex", "dict", "dir", "divmod",
    "enumerate", "eval", "exec", "filter", "float", "format", "frozenset",
    "getattr", "globals", "hasattr", "hash", "help", "hex", "id", "input",
    "int", "isinstance", "issubclass", "iter", "len", "list", "locals",
    "map", "max", "memoryview", "min", "next", "object", "oct", "open",
    "ord", "pow", "print", "property", "range", "repr", "reversed",
    "round", "set", "setattr", "slice", "sorted", "staticmethod", "str",
    "sum", "super", "tuple", "type", "vars", "zip",
})

STRING_PREFIXES = frozenset({
    "r", "u", "f", "b",
    "br", "rb", "fr", "rf", "ur", "ru", "fb", "bf", "fu", "uf",
    "bfr", "brf", "rfr", "rfb", "fbr", "frb",
})

SELF_NAME = "self"

# keyword -> tag given to the identifier that follows it
_NAME_INTRODUCERS = {
    "class": ColorTag.TYPE_NAME,
    "def": ColorTag.CALLABLE,
}

_WHITESPACE = frozenset(" \t")
_QUOTES = frozenset("'\"")
_IDENT_START = frozenset(string.ascii_letters + "_")
_IDENT_CHARS = _IDENT_START | frozenset(string.digits)

_NUMBER_RE = re.compile(
    r"0[xX][0-9a-fA-F_]+"
    r"|0[bB][01_]+"
    r"|0[oO][0-7_]+"
    r"|(?:[0-9][0-9_]*\.[0-9][0-9_]*|[0-9][0-9_]*\.[0-9]*|\.[0-9][0-9_]*|[0-9][0-9_]*)"
    r"(?:[eE][+-]?[0-9][0-9_]*)?"
)
_DUNDER_RE = re.compile(r"__\w+__")
_CLASSLIKE_RE = re.compile(r"[A-Z]\w*")

_OPERATORS_3 = frozenset({"**=", "//=", ">>=", "<<=", "..."})
_OPERATORS_2 = frozenset({
    "==", "!=", ">=", "<=", ":=", "**", "//", "->", "<<", ">>",
    "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=", "@=",
})


def _string_prefix_len(text: str, pos: int) -> int:
    """Return the prefix length of a string literal starting at *pos*, or -1."""
    for n in (3, 2, 1, 0):
        quote_at = pos + n
        if quote_at >= len(text) or text[quote_at] not in _QUOTES:
            continue
        if n == 0 or text[pos:quote_at].lower() in STRING_PREFIXES:
            return n
    return -1


def _string_end(text: str, start: int, quote: str, triple: bool, raw: bool) -> int:
    """Scan from *start* (just past the opening quote) to the closing quote."""
    closing = quote * 3 if triple else quote
    j = start
    while j < len(text):
        if not raw and text[j] == "\\":
            j += 2
            continue
        if text.startswith(closing, j):
            return j + len(closing)
        j += 1
    return len(text)


def _classify(
    ident: str,
    expect: ColorTag | None,
    last_char: str | None,
    keywords: frozenset[str],
    builtins: frozenset[str],
) -> ColorTag:
    if expect is not None:
        return expect
    if ident == SELF_NAME:
        return ColorTag.SELF
    if ident in keywords:
        return ColorTag.KEYWORD
    if _DUNDER_RE.fullmatch(ident):
        return ColorTag.DUNDER
    if last_char == ".":
        return ColorTag.ATTRIBUTE
    if ident in builtins:
        return ColorTag.BUILTIN
    if _CLASSLIKE_RE.fullmatch(ident):
        return ColorTag.TYPE_NAME
    return ColorTag.DEFAULT


def tokenize(
    line: str,
    *,
    keywords: frozenset[str] = KEYWORDS,
    builtins: frozenset[str] = BUILTINS,
) -> list[Segment]:
    """Split *line* into colored segments.

    Never raises; the segment texts always concatenate back to *line*.
    Whitespace sticks to a preceding keyword or punctuation run, and
    punctuation sticks to a preceding whitespace/punctuation run, so
    ``"class Foo:"`` yields ``"class "``, ``"Foo"`` and ``":"``.
    """
    segments: list[Segment] = []
    # glue state for the last emitted segment
    takes_space = False
    takes_punct = False

    expect: ColorTag | None = None
    last_char: str | None = None

    def emit(text: str, tag: ColorTag) -> None:
        nonlocal takes_space, takes_punct
        segments.append(Segment(text, tag))
        takes_space = tag is ColorTag.KEYWORD
        takes_punct = False

    def emit_default(text: str, *, space: bool) -> None:
        nonlocal takes_space, takes_punct
        joins = takes_space if space else takes_punct
        if joins and segments:
            prev = segments[-1]
            segments[-1] = Segment(prev.text + text, prev.tag)
            if prev.tag is ColorTag.KEYWORD:
                return
        else:
            segments.append(Segment(text, ColorTag.DEFAULT))
        takes_space = True
        takes_punct = True

    i = 0
    n = len(line)
    while i < n:
        c = line[i]

        if c in _WHITESPACE:
            j = i + 1
            while j < n and line[j] in _WHITESPACE:
                j += 1
            emit_default(line[i:j], space=True)
            i = j
            continue

        if c == "#":
            emit(line[i:], ColorTag.COMMENT)
            break

        prefix_len = _string_prefix_len(line, i)
        if prefix_len >= 0:
            quote_at = i + prefix_len
            quote = line[quote_at]
            triple = line.startswith(quote * 3, quote_at)
            raw = "r" in line[i:quote_at].lower()
            j = _string_end(line, quote_at + (3 if triple else 1), quote, triple, raw)
            emit(line[i:j], ColorTag.STRING)
            last_char = quote
            expect = None
            i = j
            continue

        m = _NUMBER_RE.match(line, i)
        if m:
            emit(m.group(), ColorTag.NUMBER)
            last_char = m.group()[-1]
            expect = None
            i = m.end()
            continue

        if c in _IDENT_START:
            j = i + 1
            while j < n and line[j] in _IDENT_CHARS:
                j += 1
            ident = line[i:j]
            tag = _classify(ident, expect, last_char, keywords, builtins)
            if expect is not None:
                expect = None
            elif tag is ColorTag.KEYWORD:
                expect = _NAME_INTRODUCERS.get(ident)
            emit(ident, tag)
            last_char = ident[-1]
            i = j
            continue

        if c == "@" and i + 1 < n and line[i + 1] in _IDENT_START:
            j = i + 1
            while j < n and (line[j] in _IDENT_CHARS or line[j] == "."):
                j += 1
            emit(line[i:j], ColorTag.DECORATOR)
            last_char = line[j - 1]
            expect = None
            i = j
            continue

        if line[i:i + 3] in _OPERATORS_3:
            op = line[i:i + 3]
        elif line[i:i + 2] in _OPERATORS_2:
            op = line[i:i + 2]
        else:
            op = c
        emit_default(op, space=False)
        last_char = op[-1]
        expect = None
        i += len(op)

    return segments


def line_text(segments: list[Segment] | tuple[Segment, ...]) -> str:
    """Reconstruct the raw text of a tokenized line."""
    return "".join(seg.text for seg in segments)
