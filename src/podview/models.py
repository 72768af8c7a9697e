"""Result models returned by podview.

These are the in-memory values handed back to callers. ``PodList`` can also
be exported in the wire shape used by earlier consumers, where each pod's
phase is carried under ``status`` and the records are wrapped in ``pods``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .constants import DEFAULT_CONSTANTS


class PodPhase(str, Enum):
    """Pod lifecycle phases reported by the API server."""

    RUNNING = "Running"
    PENDING = "Pending"
    FAILED = "Failed"
    SUCCEEDED = "Succeeded"
    UNKNOWN = "Unknown"


class DeploymentInfo(BaseModel):
    """The Deployment a lookup resolved to."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Deployment name")
    namespace: str = Field(
        default=DEFAULT_CONSTANTS.DEFAULT_NAMESPACE,
        description="Deployment namespace",
    )
    replicas: int = Field(ge=0, description="Desired replica count")


class PodRecord(BaseModel):
    """Compact view of one pod owned by the active ReplicaSet.

    ``message`` is only kept for failed pods.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(description="Pod name")
    phase: str = Field(
        serialization_alias="status",
        validation_alias="status",
        description="Pod phase (Running, Pending, Failed, ...)",
    )
    message: str = Field(default="", description="Failure message")

    @model_validator(mode="after")
    def _gate_message(self) -> PodRecord:
        if self.message and self.phase != DEFAULT_CONSTANTS.FAILED_PHASE:
            raise ValueError("message is only allowed on Failed pods")
        return self


class PodList(BaseModel):
    """Pods belonging to a Deployment. Element order is unspecified."""

    pods: list[PodRecord] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.pods)

    @property
    def names(self) -> set[str]:
        """Names of the pods in the list."""
        return {pod.name for pod in self.pods}

    def with_phase(self, phase: str) -> PodList:
        """Return a new list holding only pods in ``phase``."""
        return PodList(pods=[pod for pod in self.pods if pod.phase == phase])

    def to_wire(self) -> dict[str, Any]:
        """Export as ``{"pods": [{"name", "status", "message"}]}``."""
        return self.model_dump(by_alias=True)

    def to_json(self) -> str:
        """Export the wire shape as a JSON string."""
        return self.model_dump_json(by_alias=True)
