# compiler.py
from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from .environments import Environment, ProviderError, environment_ids, get_environment
from .model import Command, CompileResult, Configuration, Error, Step
from .nodes import Assignment, Block, Call, Directive, Identifier, Keyword
from .suggest import render_token, suggest
from .syntax import ScriptSyntaxError, parse_script
from .variables import VariableTable, literal_value

# Candidate sets for "did you mean" suggestions. Order matters for ties.
FIELDS: Tuple[str, ...] = (
    "env",
    "required_files",
    "allowed_file_extensions",
    "grade",
    "network_access",
)
KEYWORDS: Tuple[str, ...] = ("@", "step")

# name -> arity; usable in any step, with or without an environment
BUILT_IN_FUNCTIONS: Dict[str, int] = {
    "run": 1,
    "print": 1,
}

FILE_EXTENSION = re.compile(r"(\.\w+)+")
FILE_EXTENSION_HINT = "A file extension must start with a dot and not contain any special characters."


@dataclass(frozen=True)
class _State:
    """Accumulator threaded through the statements of one compile."""
    configuration: Configuration = field(default_factory=Configuration)
    variables: VariableTable = field(default_factory=VariableTable)
    environment: Optional[Environment] = None
    errors: Tuple[Error, ...] = ()


def _error(line: int, description: str, token: Any = "", suggestion: str = "") -> Error:
    if not isinstance(token, str):
        token = render_token(token)
    return Error(line=line, description=description, token=token, suggestion=suggestion)


def _add_error(state: _State, line: int, description: str, token: Any = "", suggestion: str = "") -> _State:
    return replace(state, errors=state.errors + (_error(line, description, token, suggestion),))


def _configure(state: _State, **changes: Any) -> _State:
    return replace(state, configuration=replace(state.configuration, **changes))


# ----------------------------------------------------------------------
# Directives (@field ...)
# ----------------------------------------------------------------------

def _env(state: _State, directive: Directive) -> _State:
    if not directive.args:
        return _add_error(state, directive.line, "missing environment name")

    name_arg, *param_args = directive.args
    if isinstance(name_arg, Keyword) or not all(isinstance(p, Keyword) for p in param_args):
        return _add_error(state, directive.line, "syntax error")

    name_term = literal_value(name_arg)
    name = state.variables.resolve(name_term)
    params = [(p.key, state.variables.resolve(literal_value(p.value))) for p in param_args]

    environment = get_environment(name) if isinstance(name, str) else None
    if environment is None:
        token = name if isinstance(name, str) else name_term
        return _add_error(
            state,
            directive.line,
            "environment is not defined: ",
            token,
            suggest(token, environment_ids()),
        )

    if not environment.accepts_params(len(params)):
        return _add_error(state, directive.line, "incorrect number of parameters for env: ", environment.id)

    try:
        image = environment.resolve_image(params)
    except ProviderError as e:
        return _add_error(state, directive.line, e.description, e.token)

    state = replace(state, environment=environment)
    return _configure(state, environment=environment.id, image=image)


def _required_files(state: _State, directive: Directive) -> _State:
    if not directive.args:
        return _add_error(state, directive.line, "list can not be empty: ", "required_files")
    files = tuple(render_token(literal_value(a)) for a in directive.args)
    return _configure(state, required_files=files)


def _allowed_file_extensions(state: _State, directive: Directive) -> _State:
    if not directive.args:
        return _add_error(state, directive.line, "list can not be empty: ", "allowed_file_extensions")

    valid: List[str] = []
    for arg in directive.args:
        ext = literal_value(arg)
        if isinstance(ext, str) and FILE_EXTENSION.fullmatch(ext):
            valid.append(ext)
        else:
            state = _add_error(
                state,
                directive.line,
                "Invalid file extension: ",
                render_token(ext, quoted=True),
                FILE_EXTENSION_HINT,
            )
    return _configure(state, allowed_file_extensions=tuple(valid))


def _single_value(state: _State, directive: Directive) -> Tuple[Any, Any]:
    """(term, value) of a one-argument directive; identifiers are looked up."""
    term = literal_value(directive.args[0])
    if isinstance(term, Identifier):
        return term, state.variables.resolve(term)
    return term, term


def _grade(state: _State, directive: Directive) -> _State:
    if len(directive.args) != 1:
        return _add_error(state, directive.line, "syntax error")

    term, grade = _single_value(state, directive)
    if isinstance(grade, bool) or not isinstance(grade, (int, float)):
        return _add_error(state, directive.line, "grade must be a number: ", term if grade is None else grade)
    if grade < 0 or grade > 1:
        return _add_error(state, directive.line, "grade must be a value between 0 and 1")
    return _configure(state, grade=grade)


def _network_access(state: _State, directive: Directive) -> _State:
    if len(directive.args) != 1:
        return _add_error(state, directive.line, "syntax error")

    _term, enabled = _single_value(state, directive)
    if not isinstance(enabled, bool):
        return _add_error(state, directive.line, "network_access must be a boolean true or false")
    return _configure(state, network_access=enabled)


DIRECTIVES: Dict[str, Callable[[_State, Directive], _State]] = {
    "env": _env,
    "required_files": _required_files,
    "allowed_file_extensions": _allowed_file_extensions,
    "grade": _grade,
    "network_access": _network_access,
}


def _directive(state: _State, directive: Directive) -> _State:
    handler = DIRECTIVES.get(directive.name)
    if handler is None:
        return _add_error(
            state,
            directive.line,
            "incorrect field: ",
            directive.name,
            suggest(directive.name, FIELDS),
        )
    return handler(state, directive)


# ----------------------------------------------------------------------
# Steps
# ----------------------------------------------------------------------

def _command_args(state: _State, call: Call) -> Union[List[str], Error]:
    """Resolve call arguments to strings, or the Error for the first bad one."""
    args: List[str] = []
    for arg in call.args:
        term = literal_value(arg)
        if isinstance(term, Identifier) and not state.variables.is_bound(term.name):
            return _error(call.line, "undefined variable: ", term.name)
        value = state.variables.resolve(term)
        if value is None or not isinstance(value, (str, int, float, bool)):
            return _error(call.line, "invalid argument: ", render_token(value))
        args.append(render_token(value))
    return args


def _command(state: _State, node: Any) -> Union[Command, Error]:
    if not isinstance(node, Call):
        return _error(getattr(node, "line", 0), "syntax error")

    name = node.name
    environment = state.environment

    if name in BUILT_IN_FUNCTIONS:
        arity: Optional[int] = BUILT_IN_FUNCTIONS[name]
    elif environment is None:
        return _error(node.line, "undefined function: ", name)
    else:
        arity = environment.arity_of(name)
        if arity is None:
            candidates = list(BUILT_IN_FUNCTIONS) + environment.command_names()
            return _error(node.line, "undefined function: ", name, suggest(name, candidates))

    if len(node.args) != arity:
        return _error(node.line, "incorrect amount of parameters for function: ", f"{name}/{arity}")

    args = _command_args(state, node)
    if isinstance(args, Error):
        return args

    if name in BUILT_IN_FUNCTIONS:
        return Command(kind=name, args=tuple(args))

    try:
        return environment.invoke(name, args)
    except ProviderError as e:
        return _error(node.line, e.description, e.token)


def _step(state: _State, block: Block) -> _State:
    if block.name in state.configuration.step_names:
        return _add_error(state, block.line, "the step name has already been defined: ", block.name)

    commands: List[Command] = []
    errors: List[Error] = []
    for child in block.children:
        result = _command(state, child)
        if isinstance(result, Error):
            errors.append(result)
        else:
            commands.append(result)

    # Failing commands are reported and left out; the rest of the step stays.
    step = Step(name=block.name, commands=tuple(commands))
    state = replace(state, errors=state.errors + tuple(errors))
    return _configure(state, steps=state.configuration.steps + (step,))


# ----------------------------------------------------------------------
# Statement dispatch
# ----------------------------------------------------------------------

def _incorrect_keyword(state: _State, line: int, keyword: str) -> _State:
    return _add_error(state, line, "incorrect keyword: ", keyword, suggest(keyword, KEYWORDS))


def _compile_statement(state: _State, statement: Any) -> _State:
    """One transition of the fold. Never raises for bad input; errors are recorded."""
    if isinstance(statement, Directive):
        return _directive(state, statement)
    if isinstance(statement, Assignment):
        return replace(state, variables=state.variables.bind(statement.name, statement.value))
    if isinstance(statement, Block):
        if statement.keyword != "step":
            return _incorrect_keyword(state, statement.line, statement.keyword)
        return _step(state, statement)
    if isinstance(statement, (Call, Identifier)):
        if statement.name in KEYWORDS:
            # `step "x"` without a do block
            return _add_error(state, statement.line, "syntax error")
        return _incorrect_keyword(state, statement.line, statement.name)
    return _add_error(state, getattr(statement, "line", 0), "syntax error")


def compile_statements(statements: Iterable[Any]) -> CompileResult:
    """
    Compile parsed statements, in document order, into a Configuration.

    Every statement is processed even after errors, so the result carries
    the complete error list for the script.
    """
    state = _State()
    for statement in statements:
        state = _compile_statement(state, statement)

    configuration = replace(state.configuration, errors=state.errors)
    if state.errors:
        return CompileResult(configuration=None, errors=state.errors, partial=configuration)
    return CompileResult(configuration=configuration, partial=configuration)


def compile_statements_or_fail(statements: Iterable[Any]) -> Configuration:
    """Like compile_statements, but raises CompileError listing every error."""
    return compile_statements(statements).unwrap()


def parse(source: str) -> CompileResult:
    """Parse and compile script text. A syntax error is reported as a single Error."""
    try:
        statements = parse_script(source)
    except ScriptSyntaxError as e:
        return CompileResult(
            configuration=None,
            errors=(Error(line=e.line, description=e.description, token=e.token),),
        )
    return compile_statements(statements)


def parse_or_fail(source: str) -> Configuration:
    return parse(source).unwrap()
