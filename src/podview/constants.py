"""Lookup constants.

This module centralizes the magic strings used while walking the
Deployment -> ReplicaSet -> Pod ownership chain: kind names, selector
field paths and the phases callers are allowed to filter on.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PodViewConstants:
    """Constants for the ownership lookup pipeline.

    All attributes are class-level and immutable.
    """

    # Namespace assumed when the upstream object carries none
    DEFAULT_NAMESPACE: str = "default"

    # Owner reference kinds
    DEPLOYMENT_KIND: str = "Deployment"
    REPLICASET_KIND: str = "ReplicaSet"

    # Server-side field selector paths
    NAME_FIELD: str = "metadata.name"
    # Advisory only: apps/v1 ReplicaSets expose status.replicas, not
    # spec.replicas, as a field label, so a live API server may reject it.
    # The resolver rechecks the replica count client-side.
    REPLICAS_FIELD: str = "spec.replicas"

    # Desired replica count when a Deployment omits spec.replicas
    DEFAULT_REPLICAS: int = 1

    # Phase reported when the pod status carries none
    UNKNOWN_PHASE: str = "Unknown"
    FAILED_PHASE: str = "Failed"

    # Phases accepted by get_pods_with_phase()
    SELECTABLE_PHASES: tuple[str, ...] = ("Running", "Pending", "Failed")

    # kubectl subprocess timeout in seconds
    KUBECTL_TIMEOUT: float = 60.0

    def name_selector(self, name: str) -> str:
        """Field selector matching a single object name."""
        return f"{self.NAME_FIELD}={name}"

    def replicas_selector(self, replicas: int) -> str:
        """Field selector matching a desired replica count."""
        return f"{self.REPLICAS_FIELD}={int(replicas)}"


DEFAULT_CONSTANTS = PodViewConstants()
