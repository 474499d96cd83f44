from .compiler import compile_statements, compile_statements_or_fail, parse, parse_or_fail
from .environments import Environment, ProviderError, capability, register_environment
from .model import Command, CompileError, CompileResult, Configuration, Error, Step
from .variables import VariableTable

__all__ = [
    "compile_statements",
    "compile_statements_or_fail",
    "parse",
    "parse_or_fail",
    "Environment",
    "ProviderError",
    "capability",
    "register_environment",
    "Command",
    "CompileError",
    "CompileResult",
    "Configuration",
    "Error",
    "Step",
    "VariableTable",
]
