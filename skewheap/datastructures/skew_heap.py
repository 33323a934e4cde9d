"""Skew heap: a self-adjusting mergeable min-heap.

Every ``SkewHeap`` object is both a tree node and the handle for the whole
subtree hanging from it. All mutating operations (``insert``,
``extract_min``, ``update_key``, ``meld``) work the same way:

1. compute a new subtree with the skew merge, reusing the old subtrees, then
2. rebind the invoking handle's ``(key, left, right)`` to that result.

The handle's identity never changes, only its content does. Internal nodes
are reached through ``navigate``, which returns a ``NodeView`` that goes
stale as soon as the heap it came from is mutated again.
"""

from __future__ import annotations

from enum import Enum
from typing import Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar, Union

K = TypeVar("K")


# -----------------------------
# Errors
# -----------------------------

class SkewHeapError(Exception):
    """Base class for all skew heap errors."""


class EmptyHeapError(SkewHeapError, IndexError):
    """Raised when reading or removing the minimum of an empty heap."""


class InvalidPathError(SkewHeapError, LookupError):
    """Raised when a navigation step walks past a missing child."""


class StaleViewError(SkewHeapError, RuntimeError):
    """Raised when a NodeView is used after its heap was mutated."""


# -----------------------------
# Navigation
# -----------------------------

class Direction(Enum):
    """One step of a navigation path. Values match the text protocol tokens."""

    LEFT = "I"
    RIGHT = "D"

    @classmethod
    def parse(cls, step: Union["Direction", str]) -> "Direction":
        """Accept a Direction or one of the tokens I/L (left) and D/R (right)."""
        if isinstance(step, Direction):
            return step
        token = str(step).strip().upper()
        if token in ("I", "L"):
            return cls.LEFT
        if token in ("D", "R"):
            return cls.RIGHT
        raise InvalidPathError(f"unknown path step {step!r}")


def _nonempty(node: Optional["SkewHeap[K]"]) -> Optional["SkewHeap[K]"]:
    # Collapse the empty sentinel and a missing child into None.
    if node is None or node._key is None:
        return None
    return node


# -----------------------------
# Merge (pure)
# -----------------------------

def merge(a: Optional["SkewHeap[K]"], b: Optional["SkewHeap[K]"]) -> "SkewHeap[K]":
    """Return a new heap holding the keys of both *a* and *b*.

    Neither operand is modified and the result shares no nodes with them,
    so all three heaps can be mutated independently afterwards. Copying the
    operands makes this O(n); the in-place operations use ``_merge``.
    """
    a = _nonempty(a)
    b = _nonempty(b)
    return _merge(a.copy() if a is not None else None,
                  b.copy() if b is not None else None)


def _merge(a: Optional["SkewHeap[K]"], b: Optional["SkewHeap[K]"]) -> "SkewHeap[K]":
    """Skew merge that reuses subtrees of *a* and *b* in the result.

    Only safe when the operands' old content is discarded afterwards.

    On equal roots the left operand (*a*) wins. At every level the loser is
    merged in full with the winner's right child, and the winner's left
    child becomes the new right child. That unconditional swap gives the
    amortized O(log n) bound.
    """
    a = _nonempty(a)
    b = _nonempty(b)
    if a is None:
        return b if b is not None else SkewHeap()
    if b is None:
        return a

    # Iterative form of the recursion: ``parent`` is the node whose left
    # child is still to be computed from merge(a, b).
    root: Optional[SkewHeap[K]] = None
    parent: Optional[SkewHeap[K]] = None
    while True:
        if a._key <= b._key:
            small, large = a, b
        else:
            small, large = b, a

        node = SkewHeap._node(small._key, None, _nonempty(small._left))
        if parent is None:
            root = node
        else:
            parent._left = node

        rest = _nonempty(small._right)
        if rest is None:
            node._left = SkewHeap._node(large._key, large._left, large._right)
            return root
        parent = node
        a, b = large, rest


# -----------------------------
# Heap handle
# -----------------------------

class SkewHeap(Generic[K]):
    """A skew heap node that doubles as the handle for its subtree.

    ``SkewHeap()`` is the empty sentinel and ``SkewHeap(k)`` holds a single
    key. ``None`` is reserved for "empty" and cannot be stored as a key.
    """

    __slots__ = ("_key", "_left", "_right", "_generation")

    def __init__(self, key: Optional[K] = None) -> None:
        self._key: Optional[K] = key
        self._left: Optional[SkewHeap[K]] = None
        self._right: Optional[SkewHeap[K]] = None
        self._generation = 0

    @classmethod
    def _node(cls, key: K, left: Optional["SkewHeap[K]"], right: Optional["SkewHeap[K]"]) -> "SkewHeap[K]":
        node = cls(key)
        node._left = left
        node._right = right
        return node

    @classmethod
    def from_iterable(cls, values: Iterable[K]) -> "SkewHeap[K]":
        """Build a heap by inserting *values* one at a time."""
        heap: SkewHeap[K] = cls()
        for value in values:
            heap.insert(value)
        return heap

    # -----------------------------
    # Internal helpers
    # -----------------------------
    def _assign(self, result: Optional["SkewHeap[K]"]) -> None:
        """Rebind this handle to *result*'s content (empty if *result* is)."""
        result = _nonempty(result)
        if result is None:
            self._key, self._left, self._right = None, None, None
        else:
            self._key, self._left, self._right = result._key, result._left, result._right
        self._generation += 1

    def _iter_nodes(self) -> Iterator["SkewHeap[K]"]:
        """Yield every non-empty node in pre-order (root, left, right)."""
        stack = [self] if self._key is not None else []
        while stack:
            node = stack.pop()
            yield node
            right = _nonempty(node._right)
            if right is not None:
                stack.append(right)
            left = _nonempty(node._left)
            if left is not None:
                stack.append(left)

    # -----------------------------
    # Public API
    # -----------------------------
    def is_empty(self) -> bool:
        return self._key is None

    def peek_min(self) -> K:
        """Return the smallest key without removing it (O(1))."""
        if self._key is None:
            raise EmptyHeapError("peek_min on empty heap")
        return self._key

    def insert(self, value: K) -> None:
        """Insert *value* (amortized O(log n))."""
        if value is None:
            raise TypeError("None cannot be stored in a SkewHeap")
        self._assign(_merge(self, SkewHeap(value)))

    def extract_min(self) -> None:
        """Remove the smallest key. Read it with ``peek_min`` beforehand."""
        if self._key is None:
            raise EmptyHeapError("extract_min on empty heap")
        self._assign(_merge(self._left, self._right))

    def navigate(self, path: Iterable[Union[Direction, str]]) -> "NodeView[K]":
        """Follow *path* (Direction values or I/D tokens) from this handle."""
        return NodeView(self, self, ()).navigate(path)

    def update_key(self, new_value: K, target: "NodeView[K]") -> None:
        """Replace the key at *target* with *new_value*.

        The target's key is removed with ``extract_min`` on the target node
        and *new_value* is then inserted from this (root) handle, so the new
        key does not keep the old position. Works for increases and decreases.
        """
        node = target._resolve(self)
        if node._key is None:
            raise EmptyHeapError("update_key on an empty node")
        if new_value is None:
            raise TypeError("None cannot be stored in a SkewHeap")
        node.extract_min()
        self.insert(new_value)

    def merged(self, other: "SkewHeap[K]") -> "SkewHeap[K]":
        """Pure union of this heap and *other*; see ``merge``."""
        return merge(self, other)

    def meld(self, other: "SkewHeap[K]") -> None:
        """Move a copy of every key of *other* into this heap."""
        self._assign(_merge(self, other.copy()))

    def copy(self) -> "SkewHeap[K]":
        """Return a deep copy sharing no nodes with this heap."""
        clone: SkewHeap[K] = SkewHeap(self._key)
        pending: List[Tuple[SkewHeap[K], SkewHeap[K]]] = [(self, clone)]
        while pending:
            src, dst = pending.pop()
            for side in ("_left", "_right"):
                child = _nonempty(getattr(src, side))
                if child is not None:
                    twin = SkewHeap(child._key)
                    setattr(dst, side, twin)
                    pending.append((child, twin))
        return clone

    def drain(self) -> Iterator[K]:
        """Yield keys in non-decreasing order, emptying the heap as it goes."""
        while self._key is not None:
            key = self.peek_min()
            self.extract_min()
            yield key

    def is_heap_ordered(self) -> bool:
        """Check that no non-empty child holds a key smaller than its parent."""
        for node in self._iter_nodes():
            for child in (_nonempty(node._left), _nonempty(node._right)):
                if child is not None and child._key < node._key:
                    return False
        return True

    def render(self) -> str:
        """Depth-first dump: ``RAIZ(k) IZQ(k) [...] DER(k) [...]``.

        The key shown in IZQ/DER is the parent's, followed by the child
        subtree in brackets.
        """
        if self._key is None:
            return "Monticulo vacio"
        parts: List[str] = []
        stack: List[object] = [self]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
                continue
            parts.append(f"RAIZ({item._key})")
            right = _nonempty(item._right)
            left = _nonempty(item._left)
            # Pushed in reverse so the left side is emitted first.
            if right is not None:
                stack.extend(["]", right, f" DER({item._key}) ["])
            if left is not None:
                stack.extend(["]", left, f" IZQ({item._key}) ["])
        return "".join(parts)

    def __len__(self) -> int:
        return sum(1 for _ in self._iter_nodes())

    def __bool__(self) -> bool:  # pragma: no cover - trivial
        return self._key is not None

    def to_list(self) -> List[K]:
        """Keys in pre-order (heap layout, not sorted order)."""
        return list(self)

    def __iter__(self) -> Iterator[K]:
        for node in self._iter_nodes():
            yield node._key

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"SkewHeap({self.to_list()!r})"


class NodeView(Generic[K]):
    """Read-only reference to a node inside a heap.

    Valid only until the heap it was taken from is mutated again.
    """

    __slots__ = ("_root", "_node", "_path", "_generation")

    def __init__(self, root: SkewHeap[K], node: SkewHeap[K], path: Tuple[Direction, ...]) -> None:
        self._root = root
        self._node = node
        self._path = path
        self._generation = root._generation

    @property
    def path(self) -> Tuple[Direction, ...]:
        return self._path

    @property
    def is_valid(self) -> bool:
        return self._generation == self._root._generation

    def _check(self) -> None:
        if not self.is_valid:
            raise StaleViewError("heap was mutated after this view was taken")

    def _resolve(self, root: SkewHeap[K]) -> SkewHeap[K]:
        if root is not self._root:
            raise StaleViewError("view belongs to a different heap")
        self._check()
        return self._node

    @property
    def is_empty(self) -> bool:
        self._check()
        return self._node._key is None

    @property
    def key(self) -> K:
        self._check()
        if self._node._key is None:
            raise EmptyHeapError("view points at an empty node")
        return self._node._key

    def navigate(self, path: Iterable[Union[Direction, str]]) -> "NodeView[K]":
        """Walk further down from this view."""
        self._check()
        node = self._node
        taken = list(self._path)
        for step in path:
            direction = Direction.parse(step)
            child = node._left if direction is Direction.LEFT else node._right
            child = _nonempty(child)
            taken.append(direction)
            if child is None:
                where = "".join(d.value for d in taken)
                raise InvalidPathError(f"no node at path {where!r}")
            node = child
        return NodeView(self._root, node, tuple(taken))

    def __repr__(self) -> str:  # pragma: no cover - trivial
        where = "".join(d.value for d in self._path)
        return f"NodeView(path={where!r}, valid={self.is_valid})"
