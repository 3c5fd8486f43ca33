"""
Errors — fatal, per-module failures raised by the core.

Every error carries the offending module name (and value, where there is
one) so the runner can log and record it without re-deriving context.
None of these are retried; each aborts processing for its module only.
"""
from __future__ import annotations


class NdkLinkageError(Exception):
    """Base class for all per-module linkage failures."""

    reason = "LINKAGE_ERROR"

    def __init__(self, module_name: str, message: str):
        super().__init__(message)
        self.module_name = module_name


class ConfigurationError(NdkLinkageError):
    """Module declares neither a static nor a shared build."""

    reason = "NOT_STATIC_OR_SHARED"

    def __init__(self, module_name: str):
        super().__init__(
            module_name, f"library {module_name!r} not static or shared"
        )


class NamingError(NdkLinkageError):
    """Module name does not carry the prefix its prebuilt category requires."""

    reason = "BAD_PREBUILT_NAME"

    def __init__(self, module_name: str, required_prefix: str):
        super().__init__(
            module_name,
            f"NDK prebuilts must have an {required_prefix} prefixed name "
            f"(got {module_name!r})",
        )
        self.required_prefix = required_prefix


class UnknownStlError(NdkLinkageError):
    """STL flavor is not one of the recognized NDK layouts."""

    reason = "UNKNOWN_STL"

    def __init__(self, module_name: str, stl: str):
        super().__init__(module_name, f"Unknown NDK STL: {stl}")
        self.stl = stl
