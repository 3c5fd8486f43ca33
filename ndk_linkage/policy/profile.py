"""
Profile — NDK layout conventions and naming rules.

All layout knowledge lives here so that the path resolvers contain no
opinions.  Moving to a different NDK layout is a profile change, not a
code change.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, FrozenSet, Optional, Tuple

from ndk_linkage.core.toolchain import ArchType

if TYPE_CHECKING:
    from ndk_linkage.config import Settings


# Most 64-bit NDK prebuilts store libraries in "lib64"; arm64 is not a
# multilib toolchain and stores them in "lib".  Listed explicitly: do not
# add entries by analogy.
_NON_MULTILIB_64BIT_ARCHES: FrozenSet[ArchType] = frozenset({ArchType.ARM64})

# (flavor, directory under <ndk_root>/sources).  "{gcc_version}" is filled
# from the toolchain.
_STL_LIB_DIRS: Tuple[Tuple[str, str], ...] = (
    ("libstlport", "cxx-stl/stlport/libs"),
    ("libc++", "cxx-stl/llvm-libc++/libs"),
    ("libgnustl", "cxx-stl/gnu-libstdc++/{gcc_version}/libs"),
)


@dataclass(frozen=True)
class Profile:
    """Immutable NDK layout description threaded through every resolver."""

    profile_id: str
    ndk_root: str = "prebuilts/ndk/current"

    # Name prefixes
    disambiguation_prefix: str = "ndk_"
    object_prefix: str = "ndk_crt"
    stl_prefix: str = "ndk_lib"
    stl_kind_suffixes: Tuple[str, ...] = ("_shared", "_static")

    # Extension not supplied by the toolchain
    object_ext: str = ".o"

    non_multilib_64bit_arches: FrozenSet[ArchType] = _NON_MULTILIB_64BIT_ARCHES
    stl_lib_dirs: Tuple[Tuple[str, str], ...] = _STL_LIB_DIRS

    @property
    def platforms_root(self) -> str:
        return f"{self.ndk_root}/platforms"

    @property
    def sources_root(self) -> str:
        return f"{self.ndk_root}/sources"

    @property
    def stl_flavors(self) -> Tuple[str, ...]:
        return tuple(flavor for flavor, _ in self.stl_lib_dirs)

    def stl_lib_dir_template(self, flavor: str) -> Optional[str]:
        for known, template in self.stl_lib_dirs:
            if known == flavor:
                return template
        return None

    @classmethod
    def v0(cls) -> "Profile":
        """The default profile: the in-tree "current" NDK."""
        return cls(profile_id="ndk-current")

    @classmethod
    def from_settings(cls, settings: "Settings") -> "Profile":
        return cls(profile_id=settings.PROFILE_ID, ndk_root=settings.NDK_ROOT)
