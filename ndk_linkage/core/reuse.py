"""
Reuse optimizer — compile common objects once for static+shared libraries.

When neither variant adds kind-specific cflags, both would compile the same
sources with the same flags.  The shared variant then drops its own sources
and links the static variant's objects instead.  Skipping this never changes
the resulting binaries, only the build cost.
"""
from __future__ import annotations

import logging
from typing import Optional

from ndk_linkage.core.module import (
    REUSE_OBJ_TAG,
    LibraryModule,
    MutatorContext,
    ReuseEdge,
)

log = logging.getLogger(__name__)


def can_reuse_objects(static: LibraryModule, shared: LibraryModule) -> bool:
    """True if neither variant carries additional kind-specific cflags."""
    if static.compiler is None or shared.compiler is None:
        return False
    return not static.compiler.static.cflags and not shared.compiler.shared.cflags


def optimize_reuse(
    ctx: MutatorContext,
    static: LibraryModule,
    shared: LibraryModule,
) -> Optional[ReuseEdge]:
    """
    Point *shared* at *static*'s compiled objects when that is safe.

    Only call with both variants of one module.  Returns the recorded edge,
    or None when the variants must compile independently (nothing is
    mutated in that case).
    """
    if not can_reuse_objects(static, shared):
        log.debug("%s: kind-specific cflags present, no object reuse", static.name)
        return None

    ctx.add_inter_variant_dependency(REUSE_OBJ_TAG, shared, static)
    shared.reuse_objects_from = static.variant_id
    shared.compiler.srcs = []               # type: ignore[union-attr]
    shared.compiler.generated_sources = []  # type: ignore[union-attr]

    log.debug("%s: shared variant reuses static objects", static.name)
    return ReuseEdge(
        tag=REUSE_OBJ_TAG,
        from_variant=shared.variant_id,
        to_variant=static.variant_id,
    )
