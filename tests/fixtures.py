"""Shared test fixtures: an in-memory cluster and a counting reader."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime

import pytest

from podview.k8s.reader import ObjectView, OwnerReference, ResourceKind, ResourceReader

__all__ = [
    "FakeReader",
    "HangingReader",
    "make_deployment",
    "make_replicaset",
    "make_pod",
    "s1_objects",
    "s1_reader",
]


def make_deployment(name: str, namespace: str = "", replicas: int | None = 1) -> ObjectView:
    """Create a Deployment view."""
    return ObjectView(kind="Deployment", name=name, namespace=namespace, replicas=replicas)


def make_replicaset(
    name: str,
    namespace: str,
    replicas: int,
    owner: str | None,
    created_at: datetime | None = None,
) -> ObjectView:
    """Create a ReplicaSet view owned by Deployment ``owner``."""
    owners = [OwnerReference(kind="Deployment", name=owner)] if owner else []
    return ObjectView(
        kind="ReplicaSet",
        name=name,
        namespace=namespace,
        owner_refs=owners,
        replicas=replicas,
        created_at=created_at,
    )


def make_pod(
    name: str,
    namespace: str,
    owner: str | None,
    phase: str = "Running",
    message: str = "",
) -> ObjectView:
    """Create a Pod view owned by ReplicaSet ``owner``."""
    owners = [OwnerReference(kind="ReplicaSet", name=owner)] if owner else []
    return ObjectView(
        kind="Pod",
        name=name,
        namespace=namespace,
        owner_refs=owners,
        phase=phase,
        message=message,
    )


class FakeReader(ResourceReader):
    """In-memory reader that records every list call.

    Supports ``metadata.name=`` and ``spec.replicas=`` field selectors the
    way the API server evaluates them.
    """

    def __init__(self, objects: list[ObjectView]) -> None:
        self.objects = list(objects)
        self.calls: list[tuple[ResourceKind, str | None, str | None]] = []

    async def list_objects(
        self,
        kind: ResourceKind,
        *,
        namespace: str | None = None,
        field_selector: str | None = None,
    ) -> list[ObjectView]:
        self.calls.append((kind, namespace, field_selector))
        items = [
            obj
            for obj in self.objects
            if obj.kind == kind.value
            and (namespace is None or (obj.namespace or "default") == namespace)
        ]
        if field_selector:
            path, _, value = field_selector.partition("=")
            if path == "metadata.name":
                items = [obj for obj in items if obj.name == value]
            elif path == "spec.replicas":
                items = [obj for obj in items if str(obj.replicas) == value]
            else:
                raise ValueError(f"field selector not supported: {field_selector}")
        return items


class HangingReader(FakeReader):
    """Reader whose queries never complete until cancelled."""

    def __init__(self) -> None:
        super().__init__([])
        self.started = asyncio.Event()

    async def list_objects(
        self,
        kind: ResourceKind,
        *,
        namespace: str | None = None,
        field_selector: str | None = None,
    ) -> list[ObjectView]:
        self.calls.append((kind, namespace, field_selector))
        self.started.set()
        await asyncio.Event().wait()
        return []


@pytest.fixture
def s1_objects() -> list[ObjectView]:
    """Deployment api/prod with an old and a new ReplicaSet generation."""
    return [
        make_deployment("api", "prod", replicas=2),
        make_replicaset(
            "rc-old", "prod", 0, "api", datetime(2024, 1, 1, tzinfo=UTC)
        ),
        make_replicaset(
            "rc-new", "prod", 2, "api", datetime(2024, 2, 1, tzinfo=UTC)
        ),
        make_pod("p1", "prod", "rc-new", "Running"),
        make_pod("p2", "prod", "rc-new", "Failed", "OOM"),
        make_pod("p3", "prod", "rc-old", "Running"),
    ]


@pytest.fixture
def s1_reader(s1_objects: list[ObjectView]) -> FakeReader:
    """Counting reader over the api/prod cluster."""
    return FakeReader(s1_objects)
