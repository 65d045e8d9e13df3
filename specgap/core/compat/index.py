from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

from specgap.core.errors import MissingKeyError, NoCompatDataError

from .models import CompatNode, CompatRecord, CompatTree

log = logging.getLogger("specgap.index")

SEPARATOR = "."

DEFAULT_COMPAT_ROOTS: Tuple[str, ...] = (
    "api",
    "css",
    "html",
    "http",
    "javascript",
    "mathml",
    "svg",
    "webassembly",
    "webdriver",
    "webextensions",
)

KeyPath = Union[str, Sequence[str]]


def _split(path: KeyPath) -> List[str]:
    if isinstance(path, str):
        return path.split(SEPARATOR)
    return list(path)


def _iter_compat_nodes(tree: CompatTree, roots: Sequence[str]) -> Iterator[Tuple[str, CompatNode]]:
    # depth-first, children visited in catalog order
    stack: List[Tuple[Tuple[str, ...], CompatNode]] = [
        ((root,), tree[root]) for root in reversed(roots) if root in tree
    ]
    while stack:
        segments, node = stack.pop()
        if node.compat is not None:
            yield SEPARATOR.join(segments), node
        for name in reversed(list(node.children.keys())):
            stack.append((segments + (name,), node.children[name]))


def iter_compat_paths(tree: CompatTree, roots: Sequence[str] = DEFAULT_COMPAT_ROOTS) -> Iterator[str]:
    """Lazily yield every path that carries compat data, starting from ``roots``.

    The returned iterator is single-use. Roots missing from the tree are skipped.
    """
    for path, _node in _iter_compat_nodes(tree, roots):
        yield path


class CatalogIndex:
    """Path-addressable view over a compat tree, memoized per run.

    One instance per analysis run. Nothing is shared between instances.
    """

    def __init__(self, tree: CompatTree, roots: Sequence[str] = DEFAULT_COMPAT_ROOTS):
        self._tree = tree
        self._roots = tuple(roots)
        self._store: Dict[str, CompatNode] = {}
        self._paths: List[str] = []
        self._primed = False
        self.hits = 0
        self.misses = 0

    @property
    def roots(self) -> Tuple[str, ...]:
        return self._roots

    def prime(self) -> int:
        """Consume the root-to-leaf traversal once to pre-populate the index."""
        if self._primed:
            return len(self._paths)
        for path, node in _iter_compat_nodes(self._tree, self._roots):
            self._store.setdefault(path, node)
            self._paths.append(path)
        self._primed = True
        log.debug("index primed paths=%s roots=%s", len(self._paths), ",".join(self._roots))
        return len(self._paths)

    def paths(self) -> List[str]:
        self.prime()
        return list(self._paths)

    def find(self, path: KeyPath) -> Optional[CompatNode]:
        segments = _split(path)
        # a segment holding the separator names no node, primed or not
        if any(SEPARATOR in s for s in segments):
            return None
        key = SEPARATOR.join(segments)
        node = self._store.get(key)
        if node is not None:
            self.hits += 1
            return node
        self.misses += 1

        current: Optional[CompatNode] = None
        for i, segment in enumerate(segments):
            current = self._tree.get(segment) if i == 0 else current.children.get(segment)
            if current is None:
                return None
        if current is not None:
            self._store[key] = current
        return current

    def resolve(self, path: KeyPath, *, want_compat: bool = False) -> CompatNode:
        node = self.find(path)
        key = SEPARATOR.join(_split(path))
        if node is None:
            raise MissingKeyError(key, self._first_missing_segment(_split(path)))
        if want_compat and node.compat is None:
            raise NoCompatDataError(key)
        return node

    def compat_record(self, path: KeyPath) -> CompatRecord:
        node = self.resolve(path, want_compat=True)
        assert node.compat is not None
        return node.compat

    def _first_missing_segment(self, segments: List[str]) -> str:
        current: Optional[CompatNode] = None
        for i, segment in enumerate(segments):
            current = self._tree.get(segment) if i == 0 else current.children.get(segment)
            if current is None:
                return segment
        return ""
