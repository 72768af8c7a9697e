"""Kr8s-based implementation of ResourceReader.

Uses the kr8s library for native async Kubernetes list queries.
"""

from __future__ import annotations

from typing import Any

import kr8s
from kr8s.asyncio.objects import APIObject, Deployment, Pod, ReplicaSet
from loguru import logger

from .reader import ObjectView, ResourceKind, ResourceReader

_OBJECT_TYPES: dict[ResourceKind, type[APIObject]] = {
    ResourceKind.DEPLOYMENT: Deployment,
    ResourceKind.REPLICASET: ReplicaSet,
    ResourceKind.POD: Pod,
}


class Kr8sReader(ResourceReader):
    """Kubernetes reader using the kr8s library.

    An already-constructed kr8s API client can be injected. Otherwise a
    client is created per query from the ambient kubeconfig.

    Note: A self-created client is NOT cached because kr8s clients are tied
    to the event loop that was running when they were created, and
    ``run_sync()`` creates a fresh loop per blocking call.
    """

    def __init__(self, api: Any | None = None) -> None:
        self._api = api

    async def _get_api(self) -> Any:  # Returns kr8s.asyncio.Api
        """Return the injected API client, or create one for this loop."""
        if self._api is not None:
            return self._api
        return await kr8s.asyncio.api()

    async def list_objects(
        self,
        kind: ResourceKind,
        *,
        namespace: str | None = None,
        field_selector: str | None = None,
    ) -> list[ObjectView]:
        """List objects of one kind through kr8s."""
        api = await self._get_api()
        object_type = _OBJECT_TYPES[kind]

        kwargs: dict[str, Any] = {
            "namespace": namespace if namespace else kr8s.ALL,
            "api": api,
        }
        if field_selector:
            kwargs["field_selector"] = field_selector

        logger.debug(
            f"kr8s list {kind.value} namespace={namespace or '<all>'} "
            f"field_selector={field_selector or '<none>'}"
        )
        return [
            ObjectView.from_manifest(dict(obj.raw), kind=kind.value)
            async for obj in object_type.list(**kwargs)
        ]
