"""Unit tests for pod collection and phase filtering."""

from __future__ import annotations

import pytest

from podview.collector import check_phase, collect_pods, filter_by_phase, to_pod_record
from podview.errors import InvalidPhaseError, PodsNotFoundError
from podview.k8s.reader import OwnerReference, ResourceKind
from podview.models import PodList, PodRecord
from tests.fixtures import FakeReader, make_pod, make_replicaset


@pytest.fixture
def rc_new():
    return make_replicaset("rc-new", "prod", 2, "api")


class TestCollectPods:
    """Tests for collect_pods."""

    async def test_only_owned_pods_returned(self, s1_reader: FakeReader, rc_new) -> None:
        pods = await collect_pods(s1_reader, rc_new)

        assert sorted(pods.pods, key=lambda p: p.name) == [
            PodRecord(name="p1", phase="Running"),
            PodRecord(name="p2", phase="Failed", message="OOM"),
        ]

    async def test_lists_namespace_without_selector(
        self, s1_reader: FakeReader, rc_new
    ) -> None:
        await collect_pods(s1_reader, rc_new)

        assert s1_reader.calls == [(ResourceKind.POD, "prod", None)]

    async def test_no_owned_pods(self, rc_new) -> None:
        reader = FakeReader([make_pod("p3", "prod", "rc-old")])

        with pytest.raises(PodsNotFoundError) as exc_info:
            await collect_pods(reader, rc_new)

        assert exc_info.value.replicaset == "rc-new"

    async def test_pod_with_several_owners(self, rc_new) -> None:
        pod = make_pod("p1", "prod", "rc-new")
        pod.owner_refs.insert(0, OwnerReference(kind="Node", name="node-1"))
        reader = FakeReader([pod])

        pods = await collect_pods(reader, rc_new)

        assert pods.names == {"p1"}

    async def test_same_name_other_kind_not_an_owner(self, rc_new) -> None:
        pod = make_pod("p1", "prod", None)
        pod.owner_refs.append(OwnerReference(kind="Job", name="rc-new"))
        reader = FakeReader([pod])

        with pytest.raises(PodsNotFoundError):
            await collect_pods(reader, rc_new)


class TestToPodRecord:
    """Tests for to_pod_record."""

    def test_message_dropped_unless_failed(self) -> None:
        record = to_pod_record(make_pod("p1", "prod", "rc", "Pending", "Unschedulable"))

        assert record.phase == "Pending"
        assert record.message == ""

    def test_message_kept_when_failed(self) -> None:
        record = to_pod_record(make_pod("p2", "prod", "rc", "Failed", "Evicted"))

        assert record.message == "Evicted"

    def test_missing_phase_is_unknown(self) -> None:
        record = to_pod_record(make_pod("p4", "prod", "rc", ""))

        assert record.phase == "Unknown"


class TestPhaseFilter:
    """Tests for check_phase and filter_by_phase."""

    @pytest.mark.parametrize("phase", ["Running", "Pending", "Failed"])
    def test_selectable_phases(self, phase: str) -> None:
        assert check_phase(phase) == phase

    @pytest.mark.parametrize("phase", ["", "Bogus", "running", "Succeeded", "Unknown"])
    def test_rejected_phases(self, phase: str) -> None:
        with pytest.raises(InvalidPhaseError) as exc_info:
            check_phase(phase)

        assert exc_info.value.phase == phase

    def test_filter_can_return_empty(self) -> None:
        pods = PodList(pods=[PodRecord(name="p1", phase="Running")])

        assert filter_by_phase(pods, "Pending") == PodList()
