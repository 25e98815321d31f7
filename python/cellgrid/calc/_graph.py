"""Dependency graph for formula cells: cycle detection and propagation order."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable


class DependencyGraph:
    """Tracks which cells each formula cell reads from.

    Only cells currently holding a parsed formula appear as keys of
    ``dependencies``; the reverse index is kept in step on every change.
    """

    __slots__ = ("dependencies", "dependents")

    def __init__(self) -> None:
        # cell -> set of cells it reads from
        self.dependencies: dict[str, set[str]] = {}
        # cell -> set of cells that read from it (reverse edges)
        self.dependents: dict[str, set[str]] = {}

    def __contains__(self, cell: str) -> bool:
        return cell in self.dependencies

    def add_formula(self, cell: str, refs: Iterable[str]) -> None:
        """Register a formula cell, replacing any edges it had before."""
        self.remove_formula(cell)
        deps = set(refs)
        self.dependencies[cell] = deps
        for ref in deps:
            self.dependents.setdefault(ref, set()).add(cell)

    def remove_formula(self, cell: str) -> None:
        """Drop the outgoing edges of *cell*. Edges pointing at it stay."""
        deps = self.dependencies.pop(cell, None)
        if not deps:
            return
        for ref in deps:
            readers = self.dependents.get(ref)
            if readers is None:
                continue
            readers.discard(cell)
            if not readers:
                del self.dependents[ref]

    # ------------------------------------------------------------------
    # Cycles
    # ------------------------------------------------------------------

    def find_cycle(self, cell: str) -> bool:
        """True if a walk along dependency edges from *cell* revisits its own path.

        This covers self-references, cycles through *cell* and cycles
        reachable from it. Iterative so long chains don't hit the
        recursion limit.
        """
        if cell not in self.dependencies:
            return False

        on_path: set[str] = {cell}
        # Fully explored nodes with no cycle below them
        done: set[str] = set()
        stack = [(cell, iter(self.dependencies[cell]))]

        while stack:
            node, children = stack[-1]
            for child in children:
                if child in on_path:
                    return True
                if child in done or child not in self.dependencies:
                    continue
                on_path.add(child)
                stack.append((child, iter(self.dependencies[child])))
                break
            else:
                stack.pop()
                on_path.discard(node)
                done.add(node)

        return False

    def circular_closure(self, cell: str) -> list[str]:
        """*cell* plus every cell that reads from it, directly or transitively."""
        closure: list[str] = [cell]
        visited: set[str] = {cell}
        queue: deque[str] = deque([cell])

        while queue:
            current = queue.popleft()
            for reader in self.dependents.get(current, ()):
                if reader not in visited:
                    visited.add(reader)
                    closure.append(reader)
                    queue.append(reader)

        return closure

    # ------------------------------------------------------------------
    # Propagation
    # ------------------------------------------------------------------

    def affected_cells(self, changed_cells: set[str]) -> list[str]:
        """Formula cells downstream of *changed_cells*, in evaluation order.

        Every returned cell comes after all of its affected dependencies.
        Cells that never become ready (on or behind a cycle) are appended
        in discovery order.
        """
        discovered: list[str] = []
        visited: set[str] = set(changed_cells)
        queue: deque[str] = deque(changed_cells)

        while queue:
            cell = queue.popleft()
            for reader in self.dependents.get(cell, ()):
                if reader not in visited:
                    visited.add(reader)
                    queue.append(reader)
                    if reader in self.dependencies:
                        discovered.append(reader)

        affected = set(discovered)
        in_degree = {c: len(self.dependencies[c] & affected) for c in discovered}

        ready: deque[str] = deque(c for c in discovered if in_degree[c] == 0)
        order: list[str] = []
        while ready:
            cell = ready.popleft()
            order.append(cell)
            for reader in self.dependents.get(cell, ()):
                if reader in affected:
                    in_degree[reader] -= 1
                    if in_degree[reader] == 0:
                        ready.append(reader)

        if len(order) != len(discovered):
            placed = set(order)
            order.extend(c for c in discovered if c not in placed)

        return order
