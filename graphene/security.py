"""
Accessor policy for delegated node keys.

A node key of the form ".name" asks the registry to read the field or call
the method `name` on the value being registered. Since the name comes from the
caller, a handful of names must never be reachable that way: anything that
terminates the process, performs I/O, executes code, alters control flow or
reaches into the interpreter through reflection.

FORBIDDEN_ACCESSORS is built once at import time and shared by every registry.
Dunder names are rejected as a group on top of it.
"""

import logging
from typing import Iterable, Optional, FrozenSet

logger = logging.getLogger(__name__)

# Marker that turns a custom key into a delegated accessor name
DELEGATION_MARKER = "."

FORBIDDEN_ACCESSORS: FrozenSet[str] = frozenset([
    # process termination
    "abort", "exit", "_exit", "quit", "kill", "terminate", "shutdown",
    # process creation and system calls
    "fork", "forkpty", "spawn", "system", "popen", "exec", "execv", "execve",
    "run", "call", "check_call", "check_output", "communicate", "syscall",
    "sync", "fsync", "setsid", "getpass",
    # code execution
    "eval", "compile", "apply", "load", "loads", "import_module", "reload",
    # threads, servers and sockets
    "start", "start_new_thread", "accept", "serve_forever", "handle_request",
    # file and stream I/O
    "open", "read", "readline", "readlines", "write", "writelines",
    "print", "input", "remove", "unlink", "rmdir", "rmtree", "truncate",
    "close", "flush", "send", "sendall", "recv", "connect", "bind", "listen",
    # control flow and debugging
    "sleep", "wait", "join", "throw", "raise", "breakpoint", "trace",
    "settrace", "setprofile", "set_trace", "post_mortem", "pm", "interact",
    "help",
    # reflection and introspection
    "globals", "locals", "vars", "dir", "getattr", "setattr", "delattr",
    "_getframe", "currentframe", "gi_frame", "cr_frame", "f_globals",
    "f_locals", "f_back", "mro", "register", "setdefault", "update", "clear",
    "pop", "popitem",
])


def is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def is_forbidden_accessor(name: str) -> bool:
    """Return True if `name` may never be used as a delegated accessor."""
    return name in FORBIDDEN_ACCESSORS or is_dunder(name)


class AccessorPolicy:
    """
    Decides whether a delegated accessor name may be invoked.

    The forbidden set always applies. When an allowlist is given, only the
    names in it are permitted on top of that; an empty allowlist permits
    nothing.
    """

    def __init__(self, allowlist: Optional[Iterable[str]] = None):
        self.allowlist: Optional[FrozenSet[str]] = (
            frozenset(allowlist) if allowlist is not None else None
        )

    def permits(self, name: str) -> bool:
        if is_forbidden_accessor(name):
            logger.warning(f"Rejected forbidden accessor '{name}'")
            return False
        if self.allowlist is not None and name not in self.allowlist:
            logger.warning(f"Rejected accessor '{name}': not in allowlist")
            return False
        return True

    def __repr__(self) -> str:
        if self.allowlist is None:
            return "AccessorPolicy(denylist only)"
        return f"AccessorPolicy(allowlist={sorted(self.allowlist)})"
