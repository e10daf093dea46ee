"""
naming.py

Responsibility: decide whether a project name is acceptable as a new npm package name.

The rules follow npm's own validation for new packages. Names are never corrected; the
caller gets every problem at once so the user can fix the name in one go.
"""

from __future__ import annotations

import re
from urllib.parse import quote

from themebuilder.errors import InvalidNameError

MAX_NAME_LENGTH = 214

BLACKLISTED_NAMES = frozenset({"node_modules", "favicon.ico"})

# Node.js core modules; npm refuses new packages that shadow them.
CORE_MODULE_NAMES = frozenset(
    {
        "assert", "async_hooks", "buffer", "child_process", "cluster", "console", "constants",
        "crypto", "dgram", "diagnostics_channel", "dns", "domain", "events", "fs", "http",
        "http2", "https", "inspector", "module", "net", "os", "path", "perf_hooks", "process",
        "punycode", "querystring", "readline", "repl", "stream", "string_decoder", "sys",
        "timers", "tls", "trace_events", "tty", "url", "util", "v8", "vm", "wasi",
        "worker_threads", "zlib",
    }
)

_SCOPED = re.compile(r"^(?:@([^/]+?)/)?([^/]+?)$")
_SPECIAL_CHARS = re.compile(r"[~'!()*]")


def _url_safe(part: str) -> bool:
    # Same set of characters encodeURIComponent leaves alone.
    return quote(part, safe="-_.!~*'()") == part


def name_problems(name: str) -> list[str]:
    """
    Return every reason `name` cannot be used for a new package (empty list if none).
    """
    problems: list[str] = []

    if not name:
        return ["name length must be greater than zero"]

    if name.startswith("."):
        problems.append("name cannot start with a period")
    if name.startswith("_"):
        problems.append("name cannot start with an underscore")
    if name.strip() != name:
        problems.append("name cannot contain leading or trailing spaces")
    if name.lower() in BLACKLISTED_NAMES:
        problems.append(f"{name.lower()} is a blacklisted name")
    if name in CORE_MODULE_NAMES:
        problems.append(f"{name} is a core module name")
    if len(name) > MAX_NAME_LENGTH:
        problems.append(f"name can no longer contain more than {MAX_NAME_LENGTH} characters")
    if name.lower() != name:
        problems.append("name can no longer contain capital letters")
    if _SPECIAL_CHARS.search(name.split("/")[-1]):
        problems.append("name can no longer contain special characters (\"~'!()*\")")

    if not _url_safe(name):
        m = _SCOPED.match(name)
        scoped_ok = bool(m and m.group(1) and _url_safe(m.group(1)) and _url_safe(m.group(2)))
        if not scoped_ok:
            problems.append("name can only contain URL-friendly characters")

    return problems


def validate_project_name(name: str) -> str:
    problems = name_problems(name)
    if problems:
        raise InvalidNameError(name, problems)
    return name
