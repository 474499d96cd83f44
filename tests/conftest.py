"""Pytest configuration and shared fixtures for autocheck tests."""

import sys
from pathlib import Path

import pytest

# Add package to path
SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from autocheck.environments import ENVIRONMENTS, Environment, capability, run_command


# ============================================================================
# Script snippets
# ============================================================================

VALID_ENV = '''\
@env "elixir",
  version: "1.7"
'''

VALID_STEP = '''\
step "Test 1" do
  run "this should work"
end
'''


@pytest.fixture
def valid_env() -> str:
    return VALID_ENV


@pytest.fixture
def valid_step() -> str:
    return VALID_STEP


@pytest.fixture
def script_with_grade():
    """Build a complete script around a given grade expression."""
    def build(grade: str) -> str:
        return (
            VALID_ENV
            + "\n"
            + f"@grade {grade}\n"
            + "\n"
            + 'step "random" do\n'
            + '  run "date"\n'
            + "end\n"
        )
    return build


# ============================================================================
# Environments
# ============================================================================


class PythonEnvironment(Environment):
    """Test-only environment with one capability."""

    id = "python"
    parameters = ("version",)

    def image(self, key, value):
        if key == "version":
            return f"python:{value}-slim"
        return super().image(key, value)

    @capability(arity=1)
    def run_tests(self, path):
        return run_command(f"python -m pytest {path}")


@pytest.fixture
def python_environment(monkeypatch) -> PythonEnvironment:
    """Register the python test environment for the duration of a test."""
    env = PythonEnvironment()
    monkeypatch.setitem(ENVIRONMENTS, env.id, env)
    return env


@pytest.fixture
def script_dir(tmp_path: Path, monkeypatch) -> Path:
    """Run a test inside an empty working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
