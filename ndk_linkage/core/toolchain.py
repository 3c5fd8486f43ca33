"""
Toolchain — read-only architecture and compiler facts.

These are supplied by the host's toolchain discovery; the core only reads
them to name and locate artifacts.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Tuple


@unique
class ArchType(str, Enum):
    ARM = "arm"
    ARM64 = "arm64"
    MIPS = "mips"
    MIPS64 = "mips64"
    X86 = "x86"
    X86_64 = "x86_64"


@dataclass(frozen=True)
class Arch:
    """Target architecture of a module variant."""

    arch_type: ArchType
    abi: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.abi:
            raise ValueError(f"Arch {self.arch_type.value} needs at least one ABI")

    @property
    def primary_abi(self) -> str:
        return self.abi[0]


@dataclass(frozen=True)
class ToolchainDescriptor:
    """Compiler facts needed to name prebuilt artifacts."""

    name: str                    # directory name under platforms/, e.g. "arm64"
    arch: ArchType
    is_64bit: bool
    gcc_version: str = "4.9"
    shlib_suffix: str = ".so"
    static_lib_suffix: str = ".a"
