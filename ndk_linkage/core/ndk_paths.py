"""
NDK paths — where prebuilt NDK artifacts live and what they are called.

Two layouts:
  - Platform prebuilts (system libraries and crt objects), versioned by
    platform:  <root>/platforms/android-<ver>/arch-<toolchain>/usr/lib[64]
  - STLs, not versioned by platform, one fixed layout per flavor:
    <root>/sources/<flavor dir>/<abi>

Pure functions, no IO.  Prefix validation (``check_prefix``) is the
caller's job; the resolvers assume a well-formed name.
"""
from __future__ import annotations

from pathlib import PurePosixPath

from ndk_linkage.core.errors import NamingError, UnknownStlError
from ndk_linkage.core.toolchain import Arch, ToolchainDescriptor
from ndk_linkage.policy.profile import Profile


def check_prefix(module_name: str, required_prefix: str) -> None:
    """Raise NamingError unless *module_name* starts with *required_prefix*."""
    if not module_name.startswith(required_prefix):
        raise NamingError(module_name, required_prefix)


def _strip_prefix(name: str, prefix: str) -> str:
    return name[len(prefix):] if name.startswith(prefix) else name


def _strip_suffix(name: str, suffix: str) -> str:
    return name[: -len(suffix)] if suffix and name.endswith(suffix) else name


# ── Platform prebuilts ───────────────────────────────────────────────────────

def ndk_lib_dir(
    toolchain: ToolchainDescriptor, arch: Arch, version: str, profile: Profile,
) -> PurePosixPath:
    """
    The exemption from ``lib64`` is keyed on the target *arch*; the
    toolchain only contributes its bitness and directory name.
    """
    suffix = ""
    if toolchain.is_64bit and arch.arch_type not in profile.non_multilib_64bit_arches:
        suffix = "64"
    return PurePosixPath(
        f"{profile.platforms_root}/android-{version}"
        f"/arch-{toolchain.name}/usr/lib{suffix}"
    )


def prebuilt_file_name(module_name: str, ext: str, profile: Profile) -> str:
    """
    NDK prebuilts are named like ``ndk_NAME.EXT.SDK_VERSION``; the file on
    disk is ``NAME`` + *ext*.
    """
    name = _strip_prefix(module_name, profile.disambiguation_prefix)
    return name.split(".")[0] + ext


def resolve_prebuilt_path(
    module_name: str,
    toolchain: ToolchainDescriptor,
    arch: Arch,
    version: str,
    ext: str,
    profile: Profile,
) -> PurePosixPath:
    return ndk_lib_dir(toolchain, arch, version, profile) / prebuilt_file_name(
        module_name, ext, profile
    )


# ── STLs ─────────────────────────────────────────────────────────────────────

def stl_base_name(module_name: str, profile: Profile) -> str:
    """``ndk_libc++_shared`` -> ``libc++``."""
    name = _strip_prefix(module_name, profile.disambiguation_prefix)
    for suffix in profile.stl_kind_suffixes:
        name = _strip_suffix(name, suffix)
    return name


def ndk_stl_lib_dir(
    module_name: str,
    toolchain: ToolchainDescriptor,
    arch: Arch,
    stl: str,
    profile: Profile,
) -> PurePosixPath:
    template = profile.stl_lib_dir_template(stl)
    if template is None:
        raise UnknownStlError(module_name, stl)
    lib_dir = template.format(gcc_version=toolchain.gcc_version)
    return PurePosixPath(profile.sources_root) / lib_dir / arch.primary_abi


def resolve_stl_path(
    module_name: str,
    toolchain: ToolchainDescriptor,
    arch: Arch,
    stl: str,
    static: bool,
    profile: Profile,
) -> PurePosixPath:
    """
    Resolve a prebuilt STL for one variant.

    The file name is the module name without its prefix and kind suffix,
    with the static-archive extension for static variants and the
    toolchain's shared-library suffix otherwise.

    Raises
    ------
    UnknownStlError
        If *stl* is not a recognized flavor.
    """
    lib_dir = ndk_stl_lib_dir(module_name, toolchain, arch, stl, profile)
    ext = toolchain.static_lib_suffix if static else toolchain.shlib_suffix
    return lib_dir / (stl_base_name(module_name, profile) + ext)
