"""Deployment and active ReplicaSet resolution.

The active ReplicaSet of a Deployment is the one that is owned by the
Deployment and whose desired replica count equals the Deployment's. Older
generations are scaled down to zero replicas and are excluded by the
server-side ``spec.replicas`` field selector.
"""

from __future__ import annotations

from datetime import UTC, datetime

from loguru import logger

from .cancel import CancelToken
from .constants import DEFAULT_CONSTANTS, PodViewConstants
from .errors import DeploymentNotFoundError, ReplicaSetNotFoundError
from .k8s.reader import ObjectView, ResourceKind, ResourceReader
from .models import DeploymentInfo
from .upstream import list_objects

_EPOCH = datetime.min.replace(tzinfo=UTC)


async def find_deployment(
    reader: ResourceReader,
    name: str,
    namespace: str | None = None,
    *,
    cancel: CancelToken | None = None,
    constants: PodViewConstants = DEFAULT_CONSTANTS,
) -> DeploymentInfo:
    """Locate a Deployment by name.

    Args:
        reader: Backend to query
        name: Deployment name
        namespace: Namespace to search, or None/"" to search all namespaces
        cancel: Optional cancel token
        constants: Lookup constants

    Returns:
        DeploymentInfo for the matching Deployment

    Raises:
        DeploymentNotFoundError: No Deployment has that name
    """
    items = await list_objects(
        reader,
        ResourceKind.DEPLOYMENT,
        namespace=namespace or None,
        field_selector=constants.name_selector(name),
        cancel=cancel,
    )

    deployment = select_deployment(items, name)
    if deployment is None:
        raise DeploymentNotFoundError(name, namespace or None)

    return describe_deployment(deployment, constants)


def select_deployment(items: list[ObjectView], name: str) -> ObjectView | None:
    """Pick the Deployment named ``name`` out of a list response.

    A cluster-wide query can return same-named Deployments from several
    namespaces; the lowest (namespace, name) wins.
    """
    matches = [item for item in items if item.name == name]
    if not matches:
        return None
    if len(matches) > 1:
        logger.warning(
            f"Found {len(matches)} deployments named {name!r} in namespaces "
            f"{sorted(m.namespace for m in matches)}; using the first by namespace"
        )
    return min(matches, key=lambda item: (item.namespace, item.name))


def describe_deployment(
    item: ObjectView,
    constants: PodViewConstants = DEFAULT_CONSTANTS,
) -> DeploymentInfo:
    """Project a Deployment object into a DeploymentInfo."""
    replicas = item.replicas if item.replicas is not None else constants.DEFAULT_REPLICAS
    return DeploymentInfo(
        name=item.name,
        namespace=item.namespace or constants.DEFAULT_NAMESPACE,
        replicas=replicas,
    )


async def find_active_replicaset(
    reader: ResourceReader,
    deployment: DeploymentInfo,
    *,
    cancel: CancelToken | None = None,
    constants: PodViewConstants = DEFAULT_CONSTANTS,
) -> ObjectView:
    """Locate the ReplicaSet that is the Deployment's active generation.

    Args:
        reader: Backend to query
        deployment: The resolved Deployment
        cancel: Optional cancel token
        constants: Lookup constants

    Returns:
        The active ReplicaSet

    Raises:
        ReplicaSetNotFoundError: No ReplicaSet is owned by the Deployment
            with a matching replica count
    """
    items = await list_objects(
        reader,
        ResourceKind.REPLICASET,
        namespace=deployment.namespace,
        field_selector=constants.replicas_selector(deployment.replicas),
        cancel=cancel,
    )

    replicaset = select_active_replicaset(items, deployment, constants)
    if replicaset is None:
        raise ReplicaSetNotFoundError(deployment.name, deployment.namespace)

    logger.debug(
        f"Resolved deployment {deployment.namespace}/{deployment.name} "
        f"to replicaset {replicaset.name}"
    )
    return replicaset


def select_active_replicaset(
    items: list[ObjectView],
    deployment: DeploymentInfo,
    constants: PodViewConstants = DEFAULT_CONSTANTS,
) -> ObjectView | None:
    """Pick the active ReplicaSet out of a list response.

    During a rollout two generations can briefly share the desired count;
    the newest (by creation timestamp, then name) wins.
    """
    matches = [
        item
        for item in items
        if item.replicas == deployment.replicas
        and item.is_owned_by(constants.DEPLOYMENT_KIND, deployment.name)
    ]
    if not matches:
        return None
    if len(matches) > 1:
        logger.warning(
            f"Found {len(matches)} active replicasets for deployment "
            f"{deployment.namespace}/{deployment.name}; using the newest"
        )
    return min(
        matches,
        key=lambda item: (-(item.created_at or _EPOCH).timestamp(), item.name),
    )
