"""
Module model — logical library modules, their linkers and compilers.

A ``LibraryModule`` is created at declaration time by a registered factory.
The variant mutator copies it into one or two variants (one per build
kind); each variant owns its own linker, compiler and source lists.

Link behavior is a sum type, ``LinkStrategy = Compiled | Prebuilt``,
selected per module.  Whether a linker can be split into static/shared
variants is an explicit capability (``Linker.supports_linkage``) that every
linker class states directly.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, unique
from pathlib import PurePosixPath
from typing import ClassVar, List, Optional, Protocol, Union


# ── Build kinds ──────────────────────────────────────────────────────────────

@unique
class BuildKind(str, Enum):
    """Variation names, in the order the expander creates them."""
    STATIC = "static"
    SHARED = "shared"


# ── Link strategy ────────────────────────────────────────────────────────────

@unique
class PrebuiltCategory(str, Enum):
    LIBRARY = "library"
    OBJECT = "object"
    STL = "stl"


@dataclass(frozen=True)
class Compiled:
    """Output is produced by compiling and linking the module's own sources."""


@dataclass(frozen=True)
class Prebuilt:
    """Compile nothing; the link step only computes the artifact path."""

    category: PrebuiltCategory
    export_include_flag: str = ""   # "-isystem" / "-I"; empty exports nothing


LinkStrategy = Union[Compiled, Prebuilt]


# ── Linkers ──────────────────────────────────────────────────────────────────

@dataclass
class Linker:
    """Base linker.  Not splittable into static/shared variants."""

    supports_linkage: ClassVar[bool] = False

    strategy: LinkStrategy = field(default_factory=Compiled)


@dataclass
class ObjectLinker(Linker):
    """Produces a single object file (e.g. crtbegin.o)."""

    supports_linkage: ClassVar[bool] = False


@dataclass
class LibraryLinker(Linker):
    """Linker for libraries that may be built static, shared, or both."""

    supports_linkage: ClassVar[bool] = True

    build_static: bool = False
    build_shared: bool = False
    static: bool = False            # assigned by the variant mutator

    def set_static(self, static: bool) -> None:
        self.static = static


# ── Compiler ─────────────────────────────────────────────────────────────────

@dataclass
class KindProperties:
    """Flags that apply to only one build kind."""
    cflags: List[str] = field(default_factory=list)


@dataclass
class LibraryCompiler:
    srcs: List[str] = field(default_factory=list)
    generated_sources: List[str] = field(default_factory=list)
    cflags: List[str] = field(default_factory=list)     # common to both kinds
    static: KindProperties = field(default_factory=KindProperties)
    shared: KindProperties = field(default_factory=KindProperties)


# ── Link-time results ────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PrebuiltArtifactRef:
    """Resolved location of a prebuilt artifact.  Computed once per module."""

    module_name: str
    variation: Optional[str]
    path: PurePosixPath


# ── Module ───────────────────────────────────────────────────────────────────

@dataclass
class LibraryModule:
    name: str
    module_type: str
    linker: Optional[Linker] = None
    compiler: Optional[LibraryCompiler] = None

    sdk_version: str = "current"
    export_include_dirs: List[str] = field(default_factory=list)
    shared_libs: List[str] = field(default_factory=list)
    static_libs: List[str] = field(default_factory=list)
    hide_from_make: bool = False

    # Set on variants only
    variation: Optional[str] = None
    reuse_objects_from: Optional[str] = None

    # Link-time cache, see core.link.link_output
    artifact: Optional[PrebuiltArtifactRef] = None

    @property
    def variant_id(self) -> str:
        if self.variation is None:
            return self.name
        return f"{self.name}#{self.variation}"

    @property
    def is_static(self) -> bool:
        linker = self.linker
        if linker is None or not linker.supports_linkage:
            return False
        return linker.static  # type: ignore[attr-defined]


# ── Graph edges ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class DependencyTag:
    name: str


REUSE_OBJ_TAG = DependencyTag("reuse_objects")


@dataclass(frozen=True)
class ReuseEdge:
    """Build-order edge: *from_variant* links *to_variant*'s compiled objects."""

    tag: DependencyTag
    from_variant: str
    to_variant: str


# ── Host interface ───────────────────────────────────────────────────────────

class MutatorContext(Protocol):
    """Graph-mutation primitives the host hands to the mutator, per module."""

    @property
    def module(self) -> LibraryModule:
        ...

    def create_variations(self, *names: str) -> List[LibraryModule]:
        """Replace the logical module with one copy per name, in order."""
        ...

    def add_inter_variant_dependency(
        self, tag: DependencyTag, from_: LibraryModule, to: LibraryModule,
    ) -> None:
        ...
