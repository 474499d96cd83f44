# syntax/lexer.py
from __future__ import annotations

import re
import string
from dataclasses import dataclass
from typing import Any, Iterator, List

# Token kinds
STRING = "string"
NUMBER = "number"
NAME = "name"
KEY = "key"          # `version:` in `version: "1.7"`
ATOM = "atom"        # `:name`
TRUE = "true"
FALSE = "false"
NIL = "nil"
DO = "do"
END = "end"
AT = "@"
EQUALS = "="
COMMA = ","
MINUS = "-"
LPAREN = "("
RPAREN = ")"
LBRACKET = "["
RBRACKET = "]"
NEWLINE = "newline"
EOF = "eof"

RESERVED = {
    "true": TRUE,
    "false": FALSE,
    "nil": NIL,
    "do": DO,
    "end": END,
}

PUNCTUATION = {
    "@": AT,
    "=": EQUALS,
    ",": COMMA,
    "-": MINUS,
    "(": LPAREN,
    ")": RPAREN,
    "[": LBRACKET,
    "]": RBRACKET,
}

ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "s": " ",
    "0": "\0",
    '"': '"',
    "\\": "\\",
    "#": "#",
}

_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*[?!]?")
_NUMBER = re.compile(
    r"0x[0-9A-Fa-f_]+"
    r"|0o[0-7_]+"
    r"|0b[01_]+"
    r"|[0-9][0-9_]*\.[0-9][0-9_]*(?:[eE][+-]?[0-9]+)?"
    r"|[0-9][0-9_]*"
)


@dataclass
class ScriptSyntaxError(Exception):
    """Raised when script text cannot be turned into statements."""
    line: int
    description: str
    token: str = ""

    def __str__(self) -> str:
        return f"line {self.line}: {self.description}{self.token}"


@dataclass(frozen=True)
class Token:
    kind: str
    value: Any
    line: int
    text: str = ""

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, line={self.line})"


def _number(text: str) -> int | float:
    digits = text.replace("_", "")
    if digits.startswith(("0x", "0o", "0b")):
        return int(digits, 0)
    if "." in digits:
        return float(digits)
    return int(digits)


class Lexer:
    """
    Splits script text into tokens.

    Newlines are significant (they end statements) and are kept as NEWLINE
    tokens; `;` is treated the same way. `#` starts a comment.
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1

    def error(self, description: str, token: str = "") -> ScriptSyntaxError:
        return ScriptSyntaxError(line=self.line, description=description, token=token)

    def tokens(self) -> List[Token]:
        return list(self)

    def __iter__(self) -> Iterator[Token]:
        src = self.source
        while self.pos < len(src):
            ch = src[self.pos]

            if ch in " \t\r":
                self.pos += 1
            elif ch == "#":
                while self.pos < len(src) and src[self.pos] != "\n":
                    self.pos += 1
            elif ch == "\\" and src.startswith("\\\n", self.pos):
                # explicit line continuation
                self.pos += 2
                self.line += 1
            elif ch in "\n;":
                yield Token(NEWLINE, ch, self.line, ch)
                if ch == "\n":
                    self.line += 1
                self.pos += 1
            elif ch == '"':
                yield self._string()
            elif ch == ":" and _NAME.match(src, self.pos + 1):
                m = _NAME.match(src, self.pos + 1)
                yield Token(ATOM, m.group(0), self.line, ":" + m.group(0))
                self.pos = m.end()
            elif ch in string.digits:
                yield self._number()
            elif ch.isascii() and (ch.isalpha() or ch == "_"):
                yield self._name()
            elif ch in PUNCTUATION:
                yield Token(PUNCTUATION[ch], ch, self.line, ch)
                self.pos += 1
            else:
                raise self.error("unexpected token: ", ch)

        yield Token(EOF, None, self.line, "")

    def _number(self) -> Token:
        m = _NUMBER.match(self.source, self.pos)
        text = m.group(0)
        end = m.end()
        if end < len(self.source) and (self.source[end].isalnum() or self.source[end] == "_"):
            raise self.error("invalid number: ", text + self.source[end])
        self.pos = end
        try:
            value = _number(text)
        except ValueError:
            raise self.error("invalid number: ", text) from None
        return Token(NUMBER, value, self.line, text)

    def _name(self) -> Token:
        m = _NAME.match(self.source, self.pos)
        text = m.group(0)
        self.pos = m.end()

        # `key: value` -- a colon right after the name, followed by whitespace
        if self.source.startswith(":", self.pos) and (
            self.pos + 1 >= len(self.source) or self.source[self.pos + 1] in " \t\r\n"
        ):
            self.pos += 1
            return Token(KEY, text, self.line, text + ":")

        kind = RESERVED.get(text, NAME)
        value = {TRUE: True, FALSE: False, NIL: None}.get(kind, text)
        return Token(kind, value, self.line, text)

    def _string(self) -> Token:
        src = self.source
        start_line = self.line
        if src.startswith('"""', self.pos):
            return self._heredoc()

        start = self.pos
        self.pos += 1
        chars: List[str] = []
        while True:
            if self.pos >= len(src):
                raise ScriptSyntaxError(line=start_line, description="missing terminator: ", token='"')
            ch = src[self.pos]
            if ch == '"':
                self.pos += 1
                break
            if ch == "\\" and self.pos + 1 < len(src):
                nxt = src[self.pos + 1]
                if nxt == "\n":
                    self.line += 1
                    self.pos += 2
                    continue
                chars.append(ESCAPES.get(nxt, nxt))
                self.pos += 2
                continue
            if ch == "\n":
                self.line += 1
            chars.append(ch)
            self.pos += 1

        value = "".join(chars)
        return Token(STRING, value, start_line, src[start:self.pos])

    def _heredoc(self) -> Token:
        """
        `\"\"\"` ... `\"\"\"` with the opening quotes ending their line.

        The closing line's indentation is stripped from every line.
        """
        src = self.source
        start_line = self.line
        open_end = src.find("\n", self.pos + 3)
        if open_end == -1 or src[self.pos + 3:open_end].strip():
            raise self.error("heredoc start must be followed by a new line after ", '"""')

        close = src.find('"""', open_end + 1)
        if close == -1:
            raise ScriptSyntaxError(line=start_line, description="missing terminator: ", token='"""')

        body = src[open_end + 1:close]
        lines = body.split("\n")
        indent = lines[-1] if not lines[-1].strip() else ""
        lines = lines[:-1] if not lines[-1].strip() else lines
        stripped = [ln[len(indent):] if ln.startswith(indent) else ln.lstrip() for ln in lines]
        value = "".join(ln + "\n" for ln in stripped)

        self.line += src.count("\n", self.pos, close + 3)
        self.pos = close + 3
        return Token(STRING, value, start_line, '"""')


def tokenize(source: str) -> List[Token]:
    return Lexer(source).tokens()
