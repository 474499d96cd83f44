from __future__ import annotations
import os

# Script file looked for when the CLI is not given one explicitly
DEFAULT_SCRIPT = os.environ.get("AUTOCHECK_SCRIPT", "autocheck.conf")
SCRIPT_GLOB = os.environ.get("AUTOCHECK_SCRIPT_GLOB", "*.autocheck")
