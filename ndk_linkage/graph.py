"""
Build graph — a minimal in-memory host for the linkage pass.

Provides the primitives the mutator needs (create variations, record an
inter-variant dependency) and enforces the pipeline's ordering rules:

  - each logical module is visited by the mutation pass at most once;
  - the link phase may only start after the pass has finished for every
    module (``finish_mutation`` is the barrier).
"""
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Set

from ndk_linkage.core.module import DependencyTag, LibraryModule

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DependencyEdge:
    tag: DependencyTag
    from_id: str
    to_id: str


class GraphMutatorContext:
    """Mutation handle scoped to one logical module."""

    def __init__(self, graph: "BuildGraph", module: LibraryModule):
        self._graph = graph
        self._module = module
        self._created = False

    @property
    def module(self) -> LibraryModule:
        return self._module

    def create_variations(self, *names: str) -> List[LibraryModule]:
        if self._created:
            raise RuntimeError(
                f"Variations of {self._module.name!r} were already created"
            )
        if not names:
            raise ValueError("create_variations requires at least one name")
        variants = []
        for name in names:
            variant = copy.deepcopy(self._module)
            variant.variation = name
            variants.append(variant)
        self._graph._replace(self._module.name, variants)
        self._created = True
        return variants

    def add_inter_variant_dependency(
        self, tag: DependencyTag, from_: LibraryModule, to: LibraryModule,
    ) -> None:
        if from_.name != self._module.name or to.name != self._module.name:
            raise ValueError(
                f"Inter-variant dependency must stay within {self._module.name!r}"
            )
        self._graph.add_dependency(tag, from_, to)


class BuildGraph:
    """Logical modules keyed by name; each maps to its current nodes."""

    def __init__(self) -> None:
        self._nodes: Dict[str, List[LibraryModule]] = {}
        self._visited: Set[str] = set()
        self.edges: List[DependencyEdge] = []
        self.mutation_complete = False

    def add_module(self, module: LibraryModule) -> LibraryModule:
        if self.mutation_complete:
            raise RuntimeError("Cannot add modules after the mutation pass")
        if module.name in self._nodes:
            raise ValueError(f"Duplicate module name: {module.name!r}")
        self._nodes[module.name] = [module]
        return module

    @property
    def module_names(self) -> List[str]:
        return list(self._nodes)

    def nodes(self, name: str) -> List[LibraryModule]:
        """Current nodes of *name*: the logical module, or its variants."""
        return list(self._nodes[name])

    def __iter__(self) -> Iterator[LibraryModule]:
        for nodes in self._nodes.values():
            yield from nodes

    def __len__(self) -> int:
        return sum(len(nodes) for nodes in self._nodes.values())

    def mutator_context(self, name: str) -> GraphMutatorContext:
        """Hand out the single mutation handle for *name*."""
        if self.mutation_complete:
            raise RuntimeError("Mutation pass already finished")
        if name in self._visited:
            raise RuntimeError(f"Module {name!r} was already mutated")
        self._visited.add(name)
        return GraphMutatorContext(self, self._nodes[name][0])

    def finish_mutation(self) -> None:
        self.mutation_complete = True
        log.info(
            "Mutation pass complete: %d modules, %d nodes, %d edges",
            len(self._nodes), len(self), len(self.edges),
        )

    def add_dependency(
        self, tag: DependencyTag, from_: LibraryModule, to: LibraryModule,
    ) -> DependencyEdge:
        edge = DependencyEdge(tag=tag, from_id=from_.variant_id, to_id=to.variant_id)
        self.edges.append(edge)
        return edge

    def dependencies_of(self, variant_id: str) -> List[DependencyEdge]:
        return [e for e in self.edges if e.from_id == variant_id]

    def _replace(self, name: str, variants: List[LibraryModule]) -> None:
        self._nodes[name] = list(variants)
