from .skew_heap import (
    Direction,
    EmptyHeapError,
    InvalidPathError,
    NodeView,
    SkewHeap,
    SkewHeapError,
    StaleViewError,
    merge,
)

__all__ = [
    "SkewHeap",
    "NodeView",
    "Direction",
    "merge",
    "SkewHeapError",
    "EmptyHeapError",
    "InvalidPathError",
    "StaleViewError",
]
