"""
Declaration set: resources as nodes, references as dependency edges.

A reference from A to B means B is created before A and deleted after A.
Pulumi derives the same order from Output references at deploy time; this
model lets the wiring be checked (no dangling references, no cycles) and the
order inspected without the engine.
"""

from dataclasses import dataclass, field
from graphlib import CycleError, TopologicalSorter
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from resource_graph.errors import (
    DanglingReferenceError,
    DependencyCycleError,
    DuplicateDeclarationError,
)


@dataclass(frozen=True)
class Declaration:
    """
    A single declared resource.

    Attributes:
        kind: Resource kind, e.g. "RecordSet".
        name: Identifier unique within the kind.
        references: Keys ("Kind.name") of resources this one refers to.
        attributes: Fixed attribute values (type, ttl, domains, ...).
    """

    kind: str
    name: str
    references: tuple[str, ...] = ()
    attributes: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @property
    def key(self) -> str:
        return f"{self.kind}.{self.name}"


class DeclarationSet:
    """Ordered collection of declarations keyed by ``Kind.name``."""

    def __init__(self) -> None:
        self._declarations: dict[str, Declaration] = {}

    def add(self, declaration: Declaration) -> Declaration:
        if declaration.key in self._declarations:
            raise DuplicateDeclarationError(
                "Resource declared twice", {"key": declaration.key}
            )
        self._declarations[declaration.key] = declaration
        return declaration

    def declare(
        self,
        kind: str,
        name: str,
        references: tuple[str, ...] = (),
        **attributes: Any,
    ) -> Declaration:
        """Shorthand for add(Declaration(...)); returns the declaration."""
        return self.add(Declaration(kind, name, tuple(references), attributes))

    def get(self, key: str) -> Declaration:
        return self._declarations[key]

    def keys(self) -> list[str]:
        return list(self._declarations)

    def of_kind(self, kind: str) -> list[Declaration]:
        return [d for d in self._declarations.values() if d.kind == kind]

    def __contains__(self, key: object) -> bool:
        return key in self._declarations

    def __iter__(self) -> Iterator[Declaration]:
        return iter(self._declarations.values())

    def __len__(self) -> int:
        return len(self._declarations)

    def dangling_references(self) -> list[tuple[str, str]]:
        """(source key, missing key) for every unresolved reference."""
        return [
            (declaration.key, ref)
            for declaration in self
            for ref in declaration.references
            if ref not in self._declarations
        ]

    def dependencies(self, key: str) -> list[str]:
        """Keys that must exist before ``key`` is created."""
        return list(self.get(key).references)

    def dependents(self, key: str) -> list[str]:
        """Keys that refer to ``key`` and must be deleted before it."""
        return [d.key for d in self if key in d.references]

    def creation_batches(self) -> list[list[str]]:
        """
        Group keys into batches that can be created in parallel.

        Every key's dependencies are in earlier batches. Keys within a batch
        are sorted so the result is deterministic.
        """
        self._check_references()
        sorter = TopologicalSorter({d.key: d.references for d in self})
        try:
            sorter.prepare()
        except CycleError as exc:
            cycle = exc.args[1] if len(exc.args) > 1 else []
            raise DependencyCycleError(
                "Reference cycle between resources",
                {"cycle": " -> ".join(cycle)},
            ) from exc

        batches = []
        while sorter.is_active():
            ready = sorted(sorter.get_ready())
            batches.append(ready)
            sorter.done(*ready)
        return batches

    def creation_order(self) -> list[str]:
        return [key for batch in self.creation_batches() for key in batch]

    def deletion_order(self) -> list[str]:
        return list(reversed(self.creation_order()))

    def validate(self) -> list[str]:
        """Raise on dangling references or cycles; return the creation order."""
        return self.creation_order()

    def _check_references(self) -> None:
        dangling = self.dangling_references()
        if dangling:
            source, missing = dangling[0]
            raise DanglingReferenceError(
                "Reference to undeclared resource",
                {"source": source, "missing": missing, "count": len(dangling)},
            )
