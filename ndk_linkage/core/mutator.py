"""
Linkage mutator — the per-module variant pass.

Runs the expander and then, when both variants exist, the reuse optimizer.
The host must run this exactly once per module; the core does not guard
against a second run.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ndk_linkage.core.expander import expand_variants
from ndk_linkage.core.module import LibraryModule, MutatorContext, ReuseEdge
from ndk_linkage.core.reuse import optimize_reuse


@dataclass
class MutationResult:
    variants: List[LibraryModule] = field(default_factory=list)
    reuse_edge: Optional[ReuseEdge] = None


def linkage_mutator(ctx: MutatorContext) -> MutationResult:
    """
    Split ``ctx.module`` into linkage variants.

    Modules without a linker, or whose linker cannot be split (prebuilt
    objects), are left alone and produce an empty result.
    """
    linker = ctx.module.linker
    if linker is None or not linker.supports_linkage:
        return MutationResult()

    variants = expand_variants(ctx)
    result = MutationResult(variants=variants)

    if len(variants) == 2:
        static, shared = variants
        result.reuse_edge = optimize_reuse(ctx, static, shared)

    return result
