"""Kubernetes read layer.

This package provides a small read-only abstraction over Kubernetes list
queries, supporting multiple backends (kr8s library, kubectl subprocess).

Example:
    from podview.k8s import Kr8sReader, ResourceKind, run_sync

    reader = Kr8sReader()
    pods = run_sync(reader.list_objects(ResourceKind.POD, namespace="prod"))
"""

from .kr8s_reader import Kr8sReader
from .kubectl_reader import CommandResult, KubectlCommandError, KubectlReader
from .reader import ObjectView, OwnerReference, ResourceKind, ResourceReader
from .utils import run_sync

__all__ = [
    # Reader classes
    "ResourceReader",
    "Kr8sReader",
    "KubectlReader",
    # Data classes
    "ObjectView",
    "OwnerReference",
    "ResourceKind",
    "CommandResult",
    # Errors
    "KubectlCommandError",
    # Utilities
    "run_sync",
]
