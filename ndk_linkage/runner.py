"""
Linkage runner — top-level orchestration: modules → variants → artifacts.

Ties the mutation pass, the link phase, and report IO together into a
single ``run_pipeline`` function.  Errors are per module: a module that
fails is recorded in the report and the remaining modules carry on.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Set

from ndk_linkage.config import Settings, settings as default_settings
from ndk_linkage.core.errors import NdkLinkageError
from ndk_linkage.core.link import exported_flags, link_output
from ndk_linkage.core.module import LibraryModule
from ndk_linkage.core.mutator import MutationResult, linkage_mutator
from ndk_linkage.core.toolchain import Arch, ToolchainDescriptor
from ndk_linkage.graph import BuildGraph
from ndk_linkage.io.schema import (
    LinkageReport,
    ModuleCounts,
    ModuleEntry,
    ModuleStatus,
    ReuseEdgeEntry,
    VariantEntry,
)
from ndk_linkage.io.writer import write_report
from ndk_linkage.policy.profile import Profile

logger = logging.getLogger(__name__)


@dataclass
class MutationPass:
    results: Dict[str, MutationResult] = field(default_factory=dict)
    failures: Dict[str, NdkLinkageError] = field(default_factory=dict)


def run_mutation_pass(graph: BuildGraph) -> MutationPass:
    """
    Run the linkage mutator once over every logical module, then close the
    pass so the link phase may start.
    """
    outcome = MutationPass()
    for name in graph.module_names:
        ctx = graph.mutator_context(name)
        try:
            outcome.results[name] = linkage_mutator(ctx)
        except NdkLinkageError as e:
            logger.error("Linkage mutation failed for %s: %s", name, e)
            outcome.failures[name] = e
    graph.finish_mutation()
    return outcome


def run_link_phase(
    graph: BuildGraph,
    toolchain: ToolchainDescriptor,
    arch: Arch,
    profile: Profile,
    skip: Optional[Set[str]] = None,
) -> Dict[str, NdkLinkageError]:
    """
    Resolve prebuilt artifacts for every node of every module not in *skip*.

    Returns link failures keyed by variant id.
    """
    if not graph.mutation_complete:
        raise RuntimeError("Link phase started before the mutation pass finished")

    skip = skip or set()
    failures: Dict[str, NdkLinkageError] = {}
    for name in graph.module_names:
        if name in skip:
            continue
        for node in graph.nodes(name):
            try:
                ref = link_output(node, toolchain, arch, profile)
            except NdkLinkageError as e:
                logger.error("Link failed for %s: %s", node.variant_id, e)
                failures[node.variant_id] = e
                continue
            if ref is not None:
                logger.debug("%s -> %s", node.variant_id, ref.path)
    return failures


def _variant_entry(
    node: LibraryModule, link_failures: Dict[str, NdkLinkageError],
) -> VariantEntry:
    compiler = node.compiler
    error = link_failures.get(node.variant_id)
    return VariantEntry(
        variant_id=node.variant_id,
        variation=node.variation,
        static=node.is_static,
        n_srcs=len(compiler.srcs) if compiler else 0,
        n_generated_sources=len(compiler.generated_sources) if compiler else 0,
        reuse_objects_from=node.reuse_objects_from,
        artifact_path=str(node.artifact.path) if node.artifact else None,
        exported_flags=exported_flags(node),
        error_reason=error.reason if error else None,
        error_message=str(error) if error else None,
    )


def run_pipeline(
    graph: BuildGraph,
    toolchain: ToolchainDescriptor,
    arch: Arch,
    profile: Profile | None = None,
    output_dir: Path | None = None,
) -> LinkageReport:
    """
    Run the mutation pass and the link phase over *graph*.

    Parameters
    ----------
    graph : BuildGraph
        Host graph holding the logical modules.  Mutated in place.
    toolchain, arch : ToolchainDescriptor, Arch
        Target facts for the link phase.
    profile : Profile, optional
        NDK layout.  Defaults to Profile.v0().
    output_dir : Path, optional
        Directory to write linkage_report.json.  If None, the report is
        not written to disk.

    Returns
    -------
    LinkageReport
    """
    if profile is None:
        profile = Profile.v0()

    logger.info(
        "Linkage pipeline: %d modules, toolchain=%s, arch=%s",
        len(graph.module_names), toolchain.name, arch.arch_type.value,
    )

    # ── Step 1: variant mutation (barrier at the end) ────────────────
    mutation = run_mutation_pass(graph)

    # ── Step 2: link phase ───────────────────────────────────────────
    link_failures = run_link_phase(
        graph, toolchain, arch, profile, skip=set(mutation.failures)
    )

    # ── Step 3: assemble report ──────────────────────────────────────
    counts = ModuleCounts()
    modules = []
    reuse_edges = []
    for name in graph.module_names:
        nodes = graph.nodes(name)
        error = mutation.failures.get(name)
        result = mutation.results.get(name)

        if error is not None:
            status = ModuleStatus.FAILED
            counts.failed += 1
        elif result is not None and result.variants:
            status = ModuleStatus.EXPANDED
            counts.expanded += 1
        else:
            status = ModuleStatus.UNSPLIT
            counts.unsplit += 1
        counts.total += 1

        variants = []
        if error is None:
            variants = [_variant_entry(node, link_failures) for node in nodes]
            if any(v.error_reason for v in variants):
                counts.link_failed += 1

        if result is not None and result.reuse_edge is not None:
            edge = result.reuse_edge
            reuse_edges.append(ReuseEdgeEntry(
                tag=edge.tag.name,
                from_variant=edge.from_variant,
                to_variant=edge.to_variant,
            ))

        modules.append(ModuleEntry(
            name=name,
            module_type=nodes[0].module_type,
            status=status,
            hide_from_make=nodes[0].hide_from_make,
            error_reason=error.reason if error else None,
            error_message=str(error) if error else None,
            variants=variants,
        ))

    report = LinkageReport(
        profile_id=profile.profile_id,
        toolchain=toolchain.name,
        arch=arch.arch_type.value,
        modules=modules,
        reuse_edges=reuse_edges,
        module_counts=counts,
    )

    logger.info(
        "Linkage pipeline done: %d expanded, %d unsplit, %d failed, %d link failures",
        counts.expanded, counts.unsplit, counts.failed, counts.link_failed,
    )

    if output_dir:
        report_path = write_report(report, output_dir)
        logger.info("Report saved: %s", report_path)

    return report


def run_from_settings(
    graph: BuildGraph,
    toolchain: ToolchainDescriptor,
    arch: Arch,
    settings: Optional[Settings] = None,
) -> LinkageReport:
    """``run_pipeline`` with the profile and report dir taken from settings."""
    if settings is None:
        settings = default_settings
    output_dir = Path(settings.REPORT_DIR) if settings.REPORT_DIR else None
    return run_pipeline(
        graph, toolchain, arch,
        profile=Profile.from_settings(settings),
        output_dir=output_dir,
    )
