"""Abstract Kubernetes reader interface.

Defines the read-only list contract the ownership lookup depends on. It can
be implemented by different backends (kr8s library, kubectl subprocess, or
an in-memory fake in tests).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

# =============================================================================
# Data Types
# =============================================================================


class ResourceKind(str, Enum):
    """Resource kinds the lookup lists."""

    DEPLOYMENT = "Deployment"
    REPLICASET = "ReplicaSet"
    POD = "Pod"

    @property
    def plural(self) -> str:
        """Lowercase plural name as accepted by ``kubectl get``."""
        return f"{self.value.lower()}s"


@dataclass(frozen=True)
class OwnerReference:
    """Back-pointer from a child object to its controller."""

    kind: str
    name: str


@dataclass
class ObjectView:
    """The subset of a Kubernetes object the lookup inspects.

    ``replicas`` is ``spec.replicas`` for Deployments and ReplicaSets.
    ``phase`` and ``message`` come from a Pod's status.
    """

    kind: str
    name: str
    namespace: str = ""
    owner_refs: list[OwnerReference] = field(default_factory=list)
    replicas: int | None = None
    phase: str = ""
    message: str = ""
    created_at: datetime | None = None

    def is_owned_by(self, kind: str, name: str) -> bool:
        """Check whether any owner reference points at ``kind/name``."""
        return any(ref.kind == kind and ref.name == name for ref in self.owner_refs)

    @classmethod
    def from_manifest(cls, raw: Mapping[str, Any], kind: str | None = None) -> ObjectView:
        """Build a view from a raw object manifest (API or ``kubectl -o json``)."""
        metadata = raw.get("metadata") or {}
        spec = raw.get("spec") or {}
        status = raw.get("status") or {}

        # Parse creation timestamp
        created_at = None
        if creation_ts := metadata.get("creationTimestamp"):
            try:
                created_at = datetime.fromisoformat(creation_ts.replace("Z", "+00:00"))
            except ValueError:
                pass

        owner_refs = [
            OwnerReference(kind=ref.get("kind", ""), name=ref.get("name", ""))
            for ref in metadata.get("ownerReferences") or []
        ]

        replicas = spec.get("replicas")

        return cls(
            kind=kind or raw.get("kind", ""),
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace") or "",
            owner_refs=owner_refs,
            replicas=int(replicas) if replicas is not None else None,
            phase=status.get("phase") or "",
            message=status.get("message") or "",
            created_at=created_at,
        )


# =============================================================================
# Abstract Reader
# =============================================================================


class ResourceReader(ABC):
    """Abstract base class for read-only Kubernetes list queries.

    The method is async so that both natively async (kr8s) and blocking
    (kubectl) backends fit. Use ``run_sync()`` to call from synchronous code.
    """

    @abstractmethod
    async def list_objects(
        self,
        kind: ResourceKind,
        *,
        namespace: str | None = None,
        field_selector: str | None = None,
    ) -> list[ObjectView]:
        """List objects of one kind.

        Args:
            kind: Resource kind to list
            namespace: Namespace scope, or None to list across all namespaces
            field_selector: Optional server-side field selector
                           (e.g., "metadata.name=api")

        Returns:
            Matching objects in server order

        Raises:
            Any backend exception; the pipeline wraps it as UpstreamError.
        """
        ...
