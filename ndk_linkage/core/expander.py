"""
Variant expander — split one logical library into build-kind variants.

Ordering is a contract: when both kinds are built the variants come back
as ``[static, shared]`` and downstream code indexes into that list.
"""
from __future__ import annotations

import logging
from typing import List

from ndk_linkage.core.errors import ConfigurationError
from ndk_linkage.core.module import BuildKind, LibraryModule, MutatorContext

log = logging.getLogger(__name__)


def expand_variants(ctx: MutatorContext) -> List[LibraryModule]:
    """
    Create the static and/or shared variants of ``ctx.module``.

    The module's linker must support linkage (``linker.supports_linkage``).

    Raises
    ------
    ConfigurationError
        If the linker builds neither kind.  Raised before any variation is
        created, so the graph is left untouched.
    """
    module = ctx.module
    linker = module.linker
    build_static = linker.build_static  # type: ignore[union-attr]
    build_shared = linker.build_shared  # type: ignore[union-attr]

    if build_static and build_shared:
        variants = ctx.create_variations(BuildKind.STATIC.value, BuildKind.SHARED.value)
        static, shared = variants
        static.linker.set_static(True)   # type: ignore[union-attr]
        shared.linker.set_static(False)  # type: ignore[union-attr]
    elif build_static:
        variants = ctx.create_variations(BuildKind.STATIC.value)
        variants[0].linker.set_static(True)  # type: ignore[union-attr]
    elif build_shared:
        variants = ctx.create_variations(BuildKind.SHARED.value)
        variants[0].linker.set_static(False)  # type: ignore[union-attr]
    else:
        raise ConfigurationError(module.name)

    log.debug(
        "%s: created variants %s",
        module.name, [v.variation for v in variants],
    )
    return variants
