"""
Module-type registry — maps declaration type names to module factories.

There is no import-time registration: the host creates a registry during
startup and calls ``register_ndk_module_types`` (or ``register``) itself,
passing factories as plain callables.

NDK prebuilts differ from regular prebuilts in that they aren't stripped
and usually aren't installed, so every NDK factory hides its module from
the Make-based build.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from ndk_linkage.core.module import (
    KindProperties,
    LibraryCompiler,
    LibraryLinker,
    LibraryModule,
    ObjectLinker,
    Prebuilt,
    PrebuiltCategory,
)

log = logging.getLogger(__name__)

ModuleFactory = Callable[..., LibraryModule]


class ModuleTypeRegistry:
    """Explicit name → factory table owned by the host."""

    def __init__(self) -> None:
        self._factories: Dict[str, ModuleFactory] = {}

    def register(self, module_type: str, factory: ModuleFactory) -> None:
        if module_type in self._factories:
            raise ValueError(f"Module type already registered: {module_type!r}")
        self._factories[module_type] = factory
        log.debug("Registered module type %s", module_type)

    def create(self, module_type: str, name: str, **props: Any) -> LibraryModule:
        factory = self._factories.get(module_type)
        if factory is None:
            raise KeyError(f"Unknown module type: {module_type!r}")
        return factory(name, **props)

    def __contains__(self, module_type: str) -> bool:
        return module_type in self._factories

    @property
    def module_types(self) -> List[str]:
        return sorted(self._factories)


# ── Factories ────────────────────────────────────────────────────────────────

def cc_library_factory(
    name: str,
    srcs: Optional[List[str]] = None,
    generated_sources: Optional[List[str]] = None,
    cflags: Optional[List[str]] = None,
    static: Optional[Dict[str, List[str]]] = None,
    shared: Optional[Dict[str, List[str]]] = None,
    shared_libs: Optional[List[str]] = None,
    static_libs: Optional[List[str]] = None,
    export_include_dirs: Optional[List[str]] = None,
    build_static: bool = True,
    build_shared: bool = True,
) -> LibraryModule:
    """A library compiled from source; static and shared by default.

    ``static`` / ``shared`` hold kind-specific properties, e.g.
    ``static={"cflags": ["-DSTATIC"]}``.
    """
    compiler = LibraryCompiler(
        srcs=list(srcs or []),
        generated_sources=list(generated_sources or []),
        cflags=list(cflags or []),
        static=KindProperties(cflags=list((static or {}).get("cflags", []))),
        shared=KindProperties(cflags=list((shared or {}).get("cflags", []))),
    )
    return LibraryModule(
        name=name,
        module_type="cc_library",
        linker=LibraryLinker(build_static=build_static, build_shared=build_shared),
        compiler=compiler,
        shared_libs=list(shared_libs or []),
        static_libs=list(static_libs or []),
        export_include_dirs=list(export_include_dirs or []),
    )


def ndk_prebuilt_object_factory(
    name: str, sdk_version: str = "current",
) -> LibraryModule:
    return LibraryModule(
        name=name,
        module_type="ndk_prebuilt_object",
        linker=ObjectLinker(strategy=Prebuilt(PrebuiltCategory.OBJECT)),
        sdk_version=sdk_version,
        hide_from_make=True,
    )


def ndk_prebuilt_library_factory(
    name: str,
    sdk_version: str = "current",
    export_include_dirs: Optional[List[str]] = None,
) -> LibraryModule:
    return LibraryModule(
        name=name,
        module_type="ndk_prebuilt_library",
        linker=LibraryLinker(
            strategy=Prebuilt(PrebuiltCategory.LIBRARY, export_include_flag="-isystem"),
            build_shared=True,
        ),
        sdk_version=sdk_version,
        export_include_dirs=list(export_include_dirs or []),
        hide_from_make=True,
    )


def _ndk_prebuilt_stl(
    name: str,
    module_type: str,
    static: bool,
    export_include_dirs: Optional[List[str]],
) -> LibraryModule:
    # STLs are not specific to a platform version, so no sdk_version here.
    return LibraryModule(
        name=name,
        module_type=module_type,
        linker=LibraryLinker(
            strategy=Prebuilt(PrebuiltCategory.STL, export_include_flag="-I"),
            build_static=static,
            build_shared=not static,
        ),
        export_include_dirs=list(export_include_dirs or []),
        hide_from_make=True,
    )


def ndk_prebuilt_shared_stl_factory(
    name: str, export_include_dirs: Optional[List[str]] = None,
) -> LibraryModule:
    return _ndk_prebuilt_stl(name, "ndk_prebuilt_shared_stl", False, export_include_dirs)


def ndk_prebuilt_static_stl_factory(
    name: str, export_include_dirs: Optional[List[str]] = None,
) -> LibraryModule:
    return _ndk_prebuilt_stl(name, "ndk_prebuilt_static_stl", True, export_include_dirs)


def register_ndk_module_types(registry: ModuleTypeRegistry) -> ModuleTypeRegistry:
    """Register the compiled library type and the four NDK prebuilt types."""
    registry.register("cc_library", cc_library_factory)
    registry.register("ndk_prebuilt_library", ndk_prebuilt_library_factory)
    registry.register("ndk_prebuilt_object", ndk_prebuilt_object_factory)
    registry.register("ndk_prebuilt_static_stl", ndk_prebuilt_static_stl_factory)
    registry.register("ndk_prebuilt_shared_stl", ndk_prebuilt_shared_stl_factory)
    return registry
