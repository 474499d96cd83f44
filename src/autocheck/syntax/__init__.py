from .lexer import Lexer, ScriptSyntaxError, Token, tokenize
from .parser import Parser, parse_script

__all__ = ["Lexer", "Parser", "ScriptSyntaxError", "Token", "tokenize", "parse_script"]
