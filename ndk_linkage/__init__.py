"""
ndk_linkage — static/shared variant mutation and NDK prebuilt path resolution.

Turns logical library declarations into concrete build variants and computes
where precompiled NDK artifacts live.  Graph structure and path strings only:
no I/O, no command execution.
"""

__version__ = "0.1.0"
PACKAGE_NAME = "ndk_linkage"
SCHEMA_VERSION = "0.1"
