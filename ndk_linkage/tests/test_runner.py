"""
test_runner — end-to-end pipeline over a mixed graph.

One graph holds a compiled library, one with kind-specific flags, a
prebuilt library, an object, both STL kinds, and two broken modules.
Failures must stay confined to their own module.
"""
from __future__ import annotations

import json

import pytest

from ndk_linkage.config import Settings
from ndk_linkage.io.schema import ModuleStatus
from ndk_linkage.io.writer import REPORT_FILENAME
from ndk_linkage.runner import run_from_settings, run_link_phase, run_pipeline


@pytest.fixture
def mixed_graph(graph, registry):
    graph.add_module(registry.create("cc_library", "libutils", srcs=["a.c", "b.c"]))
    graph.add_module(registry.create(
        "cc_library", "libflags", srcs=["c.c"], static={"cflags": ["-DSTATIC"]},
    ))
    graph.add_module(registry.create(
        "cc_library", "libnothing", build_static=False, build_shared=False,
    ))
    graph.add_module(registry.create(
        "ndk_prebuilt_library", "ndk_libfoo.so.24", sdk_version="24",
        export_include_dirs=["include"],
    ))
    graph.add_module(registry.create(
        "ndk_prebuilt_object", "ndk_crtbegin_so.24", sdk_version="24",
    ))
    graph.add_module(registry.create("ndk_prebuilt_shared_stl", "ndk_libc++_shared"))
    graph.add_module(registry.create("ndk_prebuilt_static_stl", "ndk_libstlport_static"))
    graph.add_module(registry.create("ndk_prebuilt_shared_stl", "ndk_libfoo++_shared"))
    return graph


def _module(report, name):
    return next(m for m in report.modules if m.name == name)


class TestRunPipeline:

    def test_counts(self, mixed_graph, x86_64_toolchain, x86_64_arch):
        report = run_pipeline(mixed_graph, x86_64_toolchain, x86_64_arch)

        assert report.module_counts.total == 8
        assert report.module_counts.expanded == 6
        assert report.module_counts.unsplit == 1
        assert report.module_counts.failed == 1
        assert report.module_counts.link_failed == 1
        assert report.profile_id == "ndk-current"
        assert report.toolchain == "x86_64"
        assert report.arch == "x86_64"

    def test_configuration_error_confined(self, mixed_graph, x86_64_toolchain, x86_64_arch):
        report = run_pipeline(mixed_graph, x86_64_toolchain, x86_64_arch)
        entry = _module(report, "libnothing")

        assert entry.status == ModuleStatus.FAILED
        assert entry.error_reason == "NOT_STATIC_OR_SHARED"
        assert entry.variants == []
        assert mixed_graph.nodes("libnothing")[0].variation is None

    def test_reuse_edges(self, mixed_graph, x86_64_toolchain, x86_64_arch):
        report = run_pipeline(mixed_graph, x86_64_toolchain, x86_64_arch)

        assert len(report.reuse_edges) == 1
        edge = report.reuse_edges[0]
        assert edge.from_variant == "libutils#shared"
        assert edge.to_variant == "libutils#static"

        utils = _module(report, "libutils")
        assert [v.variation for v in utils.variants] == ["static", "shared"]
        assert [v.n_srcs for v in utils.variants] == [2, 0]
        assert utils.variants[1].reuse_objects_from == "libutils#static"

        flags = _module(report, "libflags")
        assert [v.n_srcs for v in flags.variants] == [1, 1]

    def test_prebuilt_paths(self, mixed_graph, x86_64_toolchain, x86_64_arch):
        report = run_pipeline(mixed_graph, x86_64_toolchain, x86_64_arch)

        lib = _module(report, "ndk_libfoo.so.24")
        assert lib.hide_from_make is True
        assert lib.variants[0].artifact_path == (
            "prebuilts/ndk/current/platforms/android-24/arch-x86_64/usr/lib64/libfoo.so"
        )
        assert lib.variants[0].exported_flags == ["-isystem", "include"]

        obj = _module(report, "ndk_crtbegin_so.24")
        assert obj.status == ModuleStatus.UNSPLIT
        assert obj.variants[0].artifact_path.endswith("usr/lib64/crtbegin_so.o")

        stl = _module(report, "ndk_libc++_shared")
        assert stl.variants[0].artifact_path == (
            "prebuilts/ndk/current/sources/cxx-stl/llvm-libc++/libs/x86_64/libc++.so"
        )

        static_stl = _module(report, "ndk_libstlport_static")
        assert static_stl.variants[0].static is True
        assert static_stl.variants[0].artifact_path.endswith("stlport/libs/x86_64/libstlport.a")

    def test_unknown_stl_recorded(self, mixed_graph, x86_64_toolchain, x86_64_arch):
        report = run_pipeline(mixed_graph, x86_64_toolchain, x86_64_arch)
        entry = _module(report, "ndk_libfoo++_shared")

        assert entry.status == ModuleStatus.EXPANDED
        assert entry.variants[0].artifact_path is None
        assert entry.variants[0].error_reason == "UNKNOWN_STL"
        assert "libfoo++" in entry.variants[0].error_message

    def test_writes_report(self, mixed_graph, x86_64_toolchain, x86_64_arch, tmp_path):
        run_pipeline(mixed_graph, x86_64_toolchain, x86_64_arch, output_dir=tmp_path / "out")

        data = json.loads((tmp_path / "out" / REPORT_FILENAME).read_text())
        assert data["package_name"] == "ndk_linkage"
        assert data["module_counts"]["total"] == 8
        assert list(data) == sorted(data)

    def test_link_phase_needs_barrier(self, mixed_graph, x86_64_toolchain, x86_64_arch, profile):
        with pytest.raises(RuntimeError, match="before the mutation pass"):
            run_link_phase(mixed_graph, x86_64_toolchain, x86_64_arch, profile)

    def test_pipeline_runs_once_per_graph(self, mixed_graph, x86_64_toolchain, x86_64_arch):
        run_pipeline(mixed_graph, x86_64_toolchain, x86_64_arch)
        with pytest.raises(RuntimeError):
            run_pipeline(mixed_graph, x86_64_toolchain, x86_64_arch)


class TestRunFromSettings:

    def test_settings_drive_profile_and_output(self, graph, registry, arm_toolchain, arm_arch, tmp_path):
        graph.add_module(registry.create(
            "ndk_prebuilt_library", "ndk_libz.so.21", sdk_version="21",
        ))
        settings = Settings(
            NDK_ROOT="/opt/ndk", PROFILE_ID="custom", REPORT_DIR=str(tmp_path),
        )
        report = run_from_settings(graph, arm_toolchain, arm_arch, settings=settings)

        assert report.profile_id == "custom"
        assert report.modules[0].variants[0].artifact_path == (
            "/opt/ndk/platforms/android-21/arch-arm/usr/lib/libz.so"
        )
        assert (tmp_path / REPORT_FILENAME).exists()
