"""
Graph structure for document include relationships.

Uses networkx as the single source of truth for all relationships.
Nodes are resolved document paths; an edge A -> B means the extractor
reported B among the includes of A. The graph is purely structural -
building it from the filesystem is done in operations.py.
"""
from pathlib import Path
from typing import Iterable, Sequence, TypeVar

import networkx as nx

T = TypeVar("T")


def sorted_difference(left: Sequence[T], right: Sequence[T]) -> list[T]:
    """
    Items of `left` that do not appear in `right`.

    Both inputs must be sorted and free of duplicates. Walks the two
    sequences in a single merge pass.
    """
    result = []
    j = 0
    for item in left:
        while j < len(right) and right[j] < item:
            j += 1
        if j < len(right) and right[j] == item:
            continue
        result.append(item)
    return result


class IncludeGraph:
    """
    Directed graph of include edges between documents.

    Edge attributes:
    - 'relation': always 'includes'
    """

    def __init__(self):
        self._graph = nx.DiGraph()

    # --- Construction ---

    def add_includes(self, source: Path, includes: Iterable[Path]) -> None:
        """Record the extractor result for a root document."""
        self._graph.add_node(source)
        for target in includes:
            self._graph.add_edge(source, target, relation="includes")

    # --- Queries ---

    def children(self, path: Path) -> list[Path]:
        """Documents included by `path`, in insertion order."""
        if path not in self._graph:
            return []
        return list(self._graph.successors(path))

    def parents(self, path: Path) -> list[Path]:
        """Root documents whose includes contain `path`, sorted."""
        if path not in self._graph:
            return []
        return sorted(self._graph.predecessors(path))

    def reachable(self) -> list[Path]:
        """Every document some root includes, sorted and deduplicated."""
        return sorted({v for _, v in self._graph.edges()})

    def orphans(self, candidates: Iterable[Path]) -> list[Path]:
        """Candidates that no root includes, sorted."""
        return sorted_difference(sorted(set(candidates)), self.reachable())

    # --- Stats ---

    @property
    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.number_of_edges()
