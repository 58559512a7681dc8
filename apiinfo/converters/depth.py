"""
Nesting depth helpers.

PyYAML walks documents recursively, so a deeply nested document can
exhaust the interpreter's recursion limit. The limit is raised only
for the duration of a single decode, dump or load.
"""

import sys
from contextlib import contextmanager

# Deepest nesting msgpack's C unpacker accepts; encoding enforces the same cap
MAX_DEPTH = 1024

# Interpreter frames used per nesting level, with room to spare
FRAMES_PER_LEVEL = 8


def document_depth(document) -> int:
    """Deepest level of nested lists and dicts, counted without recursion."""
    deepest = 0
    stack = [(document, 1)]
    while stack:
        value, level = stack.pop()
        if isinstance(value, dict):
            deepest = max(deepest, level)
            stack.extend((k, level + 1) for k in value.keys())
            stack.extend((v, level + 1) for v in value.values())
        elif isinstance(value, list):
            deepest = max(deepest, level)
            stack.extend((v, level + 1) for v in value)
    return deepest


@contextmanager
def recursion_headroom(depth: int):
    """Raise the recursion limit so ``depth`` nesting levels fit."""
    previous = sys.getrecursionlimit()
    sys.setrecursionlimit(previous + min(depth, MAX_DEPTH) * FRAMES_PER_LEVEL)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)
