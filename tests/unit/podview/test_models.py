"""Unit tests for the result models."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from podview.models import DeploymentInfo, PodList, PodPhase, PodRecord


@pytest.fixture
def pods() -> PodList:
    return PodList(
        pods=[
            PodRecord(name="p1", phase="Running"),
            PodRecord(name="p2", phase="Failed", message="OOM"),
            PodRecord(name="p3", phase="Pending"),
        ]
    )


class TestPodRecord:
    """Tests for PodRecord."""

    def test_message_defaults_to_empty(self) -> None:
        assert PodRecord(name="p1", phase="Running").message == ""

    def test_failed_pod_keeps_message(self) -> None:
        assert PodRecord(name="p2", phase="Failed", message="OOM").message == "OOM"

    def test_message_rejected_for_non_failed_pod(self) -> None:
        with pytest.raises(ValidationError):
            PodRecord(name="p1", phase="Running", message="should not be here")

    def test_accepts_wire_field_name(self) -> None:
        """Records can be built from the wire shape (status instead of phase)."""
        record = PodRecord.model_validate({"name": "p1", "status": "Pending"})
        assert record.phase == "Pending"


class TestPodList:
    """Tests for PodList."""

    def test_to_wire_uses_status_key(self, pods: PodList) -> None:
        wire = pods.to_wire()

        assert set(wire) == {"pods"}
        assert wire["pods"][1] == {"name": "p2", "status": "Failed", "message": "OOM"}
        assert all("phase" not in pod for pod in wire["pods"])

    def test_to_json_round_trips_through_wire_shape(self, pods: PodList) -> None:
        data = json.loads(pods.to_json())

        assert PodList.model_validate(data) == pods

    def test_with_phase_keeps_matching_pods(self, pods: PodList) -> None:
        assert pods.with_phase("Failed").names == {"p2"}

    def test_with_phase_accepts_enum(self, pods: PodList) -> None:
        assert pods.with_phase(PodPhase.RUNNING).names == {"p1"}

    def test_with_phase_is_idempotent(self, pods: PodList) -> None:
        once = pods.with_phase("Pending")
        assert once.with_phase("Pending") == once

    def test_with_phase_empty_result(self, pods: PodList) -> None:
        assert len(pods.with_phase("Succeeded")) == 0


class TestDeploymentInfo:
    """Tests for DeploymentInfo."""

    def test_namespace_defaults_to_default(self) -> None:
        assert DeploymentInfo(name="api", replicas=2).namespace == "default"

    def test_negative_replicas_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DeploymentInfo(name="api", replicas=-1)
