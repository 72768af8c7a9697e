"""Pod lookup clients.

``AsyncPodViewClient`` runs the Deployment -> ReplicaSet -> Pod lookup as a
coroutine. ``PodViewClient`` wraps it for blocking callers.

Example:
    from podview import PodViewClient
    from podview.k8s import Kr8sReader

    client = PodViewClient(Kr8sReader(), "kube-state-metrics")
    pods = client.get_pods()
    pending = client.get_pods_with_phase("Pending")
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from .cancel import CancelToken
from .collector import check_phase, collect_pods, filter_by_phase
from .constants import DEFAULT_CONSTANTS, PodViewConstants
from .errors import EmptyArgumentError
from .k8s.kr8s_reader import Kr8sReader
from .k8s.reader import ObjectView, ResourceReader
from .k8s.utils import run_sync
from .models import DeploymentInfo, PodList
from .resolver import find_active_replicaset, find_deployment


def _as_reader(api: ResourceReader | Any) -> ResourceReader:
    """Accept either a ResourceReader or a raw kr8s API client."""
    if isinstance(api, ResourceReader):
        return api
    return Kr8sReader(api)


class AsyncPodViewClient:
    """Look up the pods of a Deployment's active ReplicaSet.

    Construction performs no validation and no API calls. Each operation
    derives everything from fresh list queries; nothing is cached between
    calls.
    """

    def __init__(
        self,
        api: ResourceReader | Any,
        deployment_name: str,
        deployment_namespace: str = "",
        *,
        constants: PodViewConstants = DEFAULT_CONSTANTS,
    ) -> None:
        """Bind a reader to a target Deployment.

        Args:
            api: A ResourceReader, or a kr8s API client to wrap in Kr8sReader
            deployment_name: Deployment name
            deployment_namespace: Deployment namespace; empty searches all
                namespaces
            constants: Lookup constants
        """
        self._reader = _as_reader(api)
        self.deployment_name = deployment_name
        self.deployment_namespace = deployment_namespace or ""
        self._constants = constants

    def __repr__(self) -> str:
        target = self.deployment_name
        if self.deployment_namespace:
            target = f"{self.deployment_namespace}/{target}"
        return f"{type(self).__name__}({target!r})"

    @property
    def reader(self) -> ResourceReader:
        return self._reader

    @property
    def constants(self) -> PodViewConstants:
        return self._constants

    async def validate_deployment(
        self, *, cancel: CancelToken | None = None
    ) -> DeploymentInfo:
        """Check that the target Deployment exists and describe it.

        Raises:
            EmptyArgumentError: The deployment name is empty
            DeploymentNotFoundError: No Deployment has that name
        """
        if not self.deployment_name:
            raise EmptyArgumentError("deployment_name")
        return await find_deployment(
            self._reader,
            self.deployment_name,
            self.deployment_namespace,
            cancel=cancel,
            constants=self._constants,
        )

    async def get_active_replicaset(
        self, *, cancel: CancelToken | None = None
    ) -> ObjectView:
        """Resolve the Deployment's active ReplicaSet."""
        deployment = await self.validate_deployment(cancel=cancel)
        return await find_active_replicaset(
            self._reader, deployment, cancel=cancel, constants=self._constants
        )

    async def get_pods(self, *, cancel: CancelToken | None = None) -> PodList:
        """Return the pods belonging to the Deployment.

        Raises:
            EmptyArgumentError: The deployment name is empty
            DeploymentNotFoundError: No Deployment has that name
            ReplicaSetNotFoundError: No active ReplicaSet was found
            PodsNotFoundError: The active ReplicaSet owns no pods
            UpstreamError: The Kubernetes API failed
            OperationCancelledError: The cancel token fired
        """
        replicaset = await self.get_active_replicaset(cancel=cancel)
        pods = await collect_pods(
            self._reader, replicaset, cancel=cancel, constants=self._constants
        )
        logger.info(
            f"Found {len(pods)} pod(s) for deployment {self.deployment_name} "
            f"via replicaset {replicaset.name}"
        )
        return pods

    async def get_pods_with_phase(
        self, phase: str, *, cancel: CancelToken | None = None
    ) -> PodList:
        """Return the Deployment's pods that are in ``phase``.

        The phase is validated before any API call. An empty result is
        returned as an empty PodList.

        Raises:
            InvalidPhaseError: ``phase`` is not Running, Pending or Failed
            Any error raised by get_pods()
        """
        check_phase(phase, self._constants)
        pods = await self.get_pods(cancel=cancel)
        return filter_by_phase(pods, phase, self._constants)


class PodViewClient:
    """Blocking wrapper around AsyncPodViewClient.

    Each call runs the lookup to completion on its own event loop via
    ``run_sync()``.
    """

    def __init__(
        self,
        api: ResourceReader | Any,
        deployment_name: str,
        deployment_namespace: str = "",
        *,
        constants: PodViewConstants = DEFAULT_CONSTANTS,
    ) -> None:
        self._client = AsyncPodViewClient(
            api, deployment_name, deployment_namespace, constants=constants
        )

    def __repr__(self) -> str:
        return repr(self._client).replace("AsyncPodViewClient", "PodViewClient")

    @property
    def deployment_name(self) -> str:
        return self._client.deployment_name

    @property
    def deployment_namespace(self) -> str:
        return self._client.deployment_namespace

    def validate_deployment(self, *, cancel: CancelToken | None = None) -> DeploymentInfo:
        """Blocking AsyncPodViewClient.validate_deployment()."""
        return run_sync(self._client.validate_deployment(cancel=cancel))

    def get_active_replicaset(self, *, cancel: CancelToken | None = None) -> ObjectView:
        """Blocking AsyncPodViewClient.get_active_replicaset()."""
        return run_sync(self._client.get_active_replicaset(cancel=cancel))

    def get_pods(self, *, cancel: CancelToken | None = None) -> PodList:
        """Blocking AsyncPodViewClient.get_pods()."""
        return run_sync(self._client.get_pods(cancel=cancel))

    def get_pods_with_phase(
        self, phase: str, *, cancel: CancelToken | None = None
    ) -> PodList:
        """Blocking AsyncPodViewClient.get_pods_with_phase()."""
        # Validate here too so no event loop is spun up for bad input
        check_phase(phase, self._client.constants)
        return run_sync(self._client.get_pods_with_phase(phase, cancel=cancel))
