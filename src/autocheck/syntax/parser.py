# syntax/parser.py
from __future__ import annotations

from typing import Any, List, Optional

from ..nodes import Assignment, Atom, Block, Call, Directive, Identifier, Keyword, ListNode, Literal
from ..suggest import render_token
from .lexer import (
    AT,
    ATOM,
    COMMA,
    DO,
    END,
    EOF,
    EQUALS,
    FALSE,
    KEY,
    LBRACKET,
    LPAREN,
    MINUS,
    NAME,
    NEWLINE,
    NIL,
    NUMBER,
    RBRACKET,
    RPAREN,
    STRING,
    TRUE,
    ScriptSyntaxError,
    Token,
    tokenize,
)

# Tokens that can start an argument of a call written without parentheses.
ARGUMENT_START = {STRING, NUMBER, NAME, KEY, ATOM, TRUE, FALSE, NIL, LBRACKET, MINUS}


class Parser:
    """
    Recursive descent parser producing the statement nodes the compiler reads.

    Statements end at a newline. A newline right after a comma, or anywhere
    inside brackets or parentheses, does not end the statement, so

        @env "elixir",
          version: "1.7"

    is one directive.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    # ------------------------------------------------------------------
    # token helpers
    # ------------------------------------------------------------------

    def peek(self, offset: int = 0) -> Token:
        idx = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[idx]

    def advance(self) -> Token:
        tok = self.peek()
        if tok.kind != EOF:
            self.pos += 1
        return tok

    def expect(self, kind: str) -> Token:
        tok = self.peek()
        if tok.kind != kind:
            raise self.unexpected(tok)
        return self.advance()

    def skip_newlines(self) -> None:
        while self.peek().kind == NEWLINE:
            self.advance()

    @staticmethod
    def unexpected(tok: Token) -> ScriptSyntaxError:
        if tok.kind == EOF:
            return ScriptSyntaxError(line=tok.line, description="syntax error: expression is incomplete")
        token = "newline" if tok.kind == NEWLINE else (tok.text or tok.kind)
        return ScriptSyntaxError(line=tok.line, description="syntax error before: ", token=token)

    # ------------------------------------------------------------------
    # statements
    # ------------------------------------------------------------------

    def parse(self) -> List[Any]:
        return self.statements(EOF)

    def statements(self, terminator: str, opened_at: Optional[Token] = None) -> List[Any]:
        out: List[Any] = []
        self.skip_newlines()
        while self.peek().kind != terminator:
            if self.peek().kind == EOF:
                line = opened_at.line if opened_at else self.peek().line
                raise ScriptSyntaxError(line=line, description="missing terminator: ", token="end")
            out.append(self.statement())
            tok = self.peek()
            if tok.kind == NEWLINE:
                self.skip_newlines()
            elif tok.kind != terminator:
                raise self.unexpected(tok)
        return out

    def statement(self) -> Any:
        tok = self.peek()

        if tok.kind == AT:
            self.advance()
            name = self.expect(NAME)
            return Directive(name=name.value, line=tok.line, args=tuple(self.call_args()))

        if tok.kind == NAME and self.peek(1).kind == EQUALS:
            self.advance()
            self.advance()
            return Assignment(name=tok.value, value=self.expression(), line=tok.line)

        if tok.kind == NAME:
            self.advance()
            args = self.call_args()
            if self.peek().kind == DO:
                return self.block(tok, args)
            return Call(name=tok.value, line=tok.line, args=tuple(args))

        return self.expression()

    def block(self, keyword: Token, args: List[Any]) -> Block:
        do = self.expect(DO)
        if len(args) != 1 or not isinstance(args[0], Literal) or not isinstance(args[0].value, str):
            raise ScriptSyntaxError(
                line=keyword.line,
                description=f"{keyword.value} name must be a string: ",
                token=render_token(args[0] if len(args) == 1 else args),
            )
        children = self.statements(END, opened_at=do)
        self.expect(END)
        return Block(name=args[0].value, line=keyword.line, children=tuple(children), keyword=keyword.value)

    # ------------------------------------------------------------------
    # arguments and values
    # ------------------------------------------------------------------

    def call_args(self) -> List[Any]:
        if self.peek().kind == LPAREN:
            self.advance()
            args = self.arguments(RPAREN)
            self.expect(RPAREN)
            return args
        if self.peek().kind in ARGUMENT_START:
            return self.arguments(None)
        return []

    def arguments(self, closing: Optional[str]) -> List[Any]:
        args: List[Any] = []
        while True:
            if closing:
                self.skip_newlines()
                if self.peek().kind == closing:
                    break
            args.append(self.argument())
            if closing:
                self.skip_newlines()
            if self.peek().kind != COMMA:
                break
            self.advance()
            self.skip_newlines()
        return args

    def argument(self) -> Any:
        tok = self.peek()
        if tok.kind == KEY:
            self.advance()
            return Keyword(key=tok.value, value=self.expression(), line=tok.line)
        return self.expression()

    def expression(self) -> Any:
        tok = self.advance()

        if tok.kind in (STRING, NUMBER, TRUE, FALSE, NIL):
            return Literal(value=tok.value, line=tok.line)
        if tok.kind == MINUS:
            num = self.peek()
            if num.kind != NUMBER:
                raise self.unexpected(num)
            self.advance()
            return Literal(value=-num.value, line=tok.line)
        if tok.kind == ATOM:
            return Atom(name=tok.value, line=tok.line)
        if tok.kind == NAME:
            return Identifier(name=tok.value, line=tok.line)
        if tok.kind == LBRACKET:
            items = self.arguments(RBRACKET)
            self.expect(RBRACKET)
            return ListNode(items=tuple(items), line=tok.line)

        raise self.unexpected(tok)


def parse_script(source: str) -> List[Any]:
    """Turn script text into statement nodes. Raises ScriptSyntaxError."""
    return Parser(tokenize(source)).parse()
