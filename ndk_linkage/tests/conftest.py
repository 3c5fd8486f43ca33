"""
Test fixtures for ndk_linkage.

All fixtures are pure-Python: no NDK checkout, no compiler, no file
system.  They provide toolchain facts for a handful of targets, a profile,
a registry with the NDK module types, and an empty build graph.
"""
from __future__ import annotations

import pytest

from ndk_linkage.core.toolchain import Arch, ArchType, ToolchainDescriptor
from ndk_linkage.graph import BuildGraph
from ndk_linkage.policy.profile import Profile
from ndk_linkage.registry import ModuleTypeRegistry, register_ndk_module_types


# ═══════════════════════════════════════════════════════════════════════════════
# Toolchains
# ═══════════════════════════════════════════════════════════════════════════════

@pytest.fixture
def x86_64_toolchain() -> ToolchainDescriptor:
    return ToolchainDescriptor(name="x86_64", arch=ArchType.X86_64, is_64bit=True)


@pytest.fixture
def arm64_toolchain() -> ToolchainDescriptor:
    return ToolchainDescriptor(name="arm64", arch=ArchType.ARM64, is_64bit=True)


@pytest.fixture
def arm_toolchain() -> ToolchainDescriptor:
    return ToolchainDescriptor(name="arm", arch=ArchType.ARM, is_64bit=False)


@pytest.fixture
def x86_64_arch() -> Arch:
    return Arch(arch_type=ArchType.X86_64, abi=("x86_64",))


@pytest.fixture
def arm64_arch() -> Arch:
    return Arch(arch_type=ArchType.ARM64, abi=("arm64-v8a",))


@pytest.fixture
def arm_arch() -> Arch:
    return Arch(arch_type=ArchType.ARM, abi=("armeabi-v7a", "armeabi"))


# ═══════════════════════════════════════════════════════════════════════════════
# Profile / registry / graph
# ═══════════════════════════════════════════════════════════════════════════════

@pytest.fixture
def profile() -> Profile:
    return Profile.v0()


@pytest.fixture
def registry() -> ModuleTypeRegistry:
    return register_ndk_module_types(ModuleTypeRegistry())


@pytest.fixture
def graph() -> BuildGraph:
    return BuildGraph()
