"""
Schema — Pydantic models for the linkage report.

One output per pipeline run: linkage_report.json, listing every logical
module, the variants it was split into, the reuse edges recorded, and the
resolved prebuilt artifact paths.

Runtime contract fields (present in every output):
  package_name, schema_version, profile_id.
"""
from datetime import datetime, timezone
from enum import Enum, unique
from typing import List, Optional

from pydantic import BaseModel, Field

from ndk_linkage import PACKAGE_NAME, SCHEMA_VERSION


@unique
class ModuleStatus(str, Enum):
    EXPANDED = "EXPANDED"      # split into linkage variants
    UNSPLIT = "UNSPLIT"        # no linkage (objects, no linker)
    FAILED = "FAILED"          # aborted by a linkage error


# ── Per-variant entry ────────────────────────────────────────────────────────

class VariantEntry(BaseModel):
    variant_id: str
    variation: Optional[str] = None
    static: bool = False

    n_srcs: int = 0
    n_generated_sources: int = 0
    reuse_objects_from: Optional[str] = None

    artifact_path: Optional[str] = None
    exported_flags: List[str] = Field(default_factory=list)

    error_reason: Optional[str] = None
    error_message: Optional[str] = None


# ── Per-module entry ─────────────────────────────────────────────────────────

class ModuleEntry(BaseModel):
    name: str
    module_type: str
    status: ModuleStatus
    hide_from_make: bool = False

    error_reason: Optional[str] = None
    error_message: Optional[str] = None

    variants: List[VariantEntry] = Field(default_factory=list)


class ReuseEdgeEntry(BaseModel):
    tag: str
    from_variant: str
    to_variant: str


class ModuleCounts(BaseModel):
    total: int = 0
    expanded: int = 0
    unsplit: int = 0
    failed: int = 0
    link_failed: int = 0


# ── Report ───────────────────────────────────────────────────────────────────

class LinkageReport(BaseModel):
    """Pipeline summary — linkage_report.json."""

    package_name: str = PACKAGE_NAME
    schema_version: str = SCHEMA_VERSION
    profile_id: str

    toolchain: str
    arch: str

    modules: List[ModuleEntry] = Field(default_factory=list)
    reuse_edges: List[ReuseEdgeEntry] = Field(default_factory=list)
    module_counts: ModuleCounts = Field(default_factory=ModuleCounts)

    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
