"""
Link — per-variant link-time behavior selected by the module's strategy.

``Compiled`` modules are linked by the host's compile pipeline; this module
has nothing to say about them beyond their declared dependencies.
``Prebuilt`` modules compile nothing: linking only computes where the
artifact already lives.  The result is cached on the module the first time
it is requested.

Naming conventions per prebuilt category:
  object   ndk_crt*   <platform dir>/<name>.o
  library  ndk_*      <platform dir>/<name><shlib suffix>
  stl      ndk_lib*   <stl dir>/<abi>/<name>{.a | <shlib suffix>}
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import List, Optional

from ndk_linkage.core.module import (
    Compiled,
    LibraryModule,
    Prebuilt,
    PrebuiltArtifactRef,
    PrebuiltCategory,
)
from ndk_linkage.core.ndk_paths import (
    check_prefix,
    resolve_prebuilt_path,
    resolve_stl_path,
    stl_base_name,
)
from ndk_linkage.core.toolchain import Arch, ToolchainDescriptor
from ndk_linkage.policy.profile import Profile


@dataclass
class LinkerDeps:
    shared_libs: List[str] = field(default_factory=list)
    static_libs: List[str] = field(default_factory=list)


def linker_deps(module: LibraryModule) -> LinkerDeps:
    """Libraries *module* links against.  NDK prebuilts have none."""
    if module.linker is None or isinstance(module.linker.strategy, Prebuilt):
        return LinkerDeps()
    return LinkerDeps(
        shared_libs=list(module.shared_libs),
        static_libs=list(module.static_libs),
    )


def exported_flags(module: LibraryModule) -> List[str]:
    """Include flags exported to dependents, e.g. ``["-isystem", dir]``."""
    if module.linker is None:
        return []
    strategy = module.linker.strategy
    if not isinstance(strategy, Prebuilt) or not strategy.export_include_flag:
        return []
    flags: List[str] = []
    for include_dir in module.export_include_dirs:
        flags.extend([strategy.export_include_flag, include_dir])
    return flags


def _resolve(
    module: LibraryModule,
    strategy: Prebuilt,
    toolchain: ToolchainDescriptor,
    arch: Arch,
    profile: Profile,
) -> PurePosixPath:
    name = module.name

    if strategy.category == PrebuiltCategory.OBJECT:
        check_prefix(name, profile.object_prefix)
        return resolve_prebuilt_path(
            name, toolchain, arch, module.sdk_version, profile.object_ext, profile
        )

    if strategy.category == PrebuiltCategory.STL:
        check_prefix(name, profile.stl_prefix)
        return resolve_stl_path(
            name,
            toolchain,
            arch,
            stl_base_name(name, profile),
            module.is_static,
            profile,
        )

    check_prefix(name, profile.disambiguation_prefix)
    return resolve_prebuilt_path(
        name, toolchain, arch, module.sdk_version, toolchain.shlib_suffix, profile
    )


def link_output(
    module: LibraryModule,
    toolchain: ToolchainDescriptor,
    arch: Arch,
    profile: Profile,
) -> Optional[PrebuiltArtifactRef]:
    """
    Return the prebuilt artifact for *module*, resolving it on first use.

    Returns None for compiled modules and modules without a linker.

    Raises
    ------
    NamingError
        If the module name lacks the prefix its prebuilt category requires.
    UnknownStlError
        If a prebuilt STL module names an unrecognized flavor.
    """
    if module.artifact is not None:
        return module.artifact
    if module.linker is None:
        return None

    strategy = module.linker.strategy
    if isinstance(strategy, Compiled):
        return None

    path = _resolve(module, strategy, toolchain, arch, profile)
    module.artifact = PrebuiltArtifactRef(
        module_name=module.name,
        variation=module.variation,
        path=path,
    )
    return module.artifact
