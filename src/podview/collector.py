"""Pod collection for a ReplicaSet.

Owner references are not field-selectable, so every pod in the
ReplicaSet's namespace is listed and filtered locally.
"""

from __future__ import annotations

from loguru import logger

from .cancel import CancelToken
from .constants import DEFAULT_CONSTANTS, PodViewConstants
from .errors import InvalidPhaseError, PodsNotFoundError
from .k8s.reader import ObjectView, ResourceKind, ResourceReader
from .models import PodList, PodRecord
from .upstream import list_objects


async def collect_pods(
    reader: ResourceReader,
    replicaset: ObjectView,
    *,
    cancel: CancelToken | None = None,
    constants: PodViewConstants = DEFAULT_CONSTANTS,
) -> PodList:
    """List the pods owned by ``replicaset``.

    Raises:
        PodsNotFoundError: The ReplicaSet owns no pods
    """
    namespace = replicaset.namespace or constants.DEFAULT_NAMESPACE
    items = await list_objects(
        reader,
        ResourceKind.POD,
        namespace=namespace,
        cancel=cancel,
    )

    pods = PodList(
        pods=[
            to_pod_record(item, constants)
            for item in items
            if item.is_owned_by(constants.REPLICASET_KIND, replicaset.name)
        ]
    )
    if not pods.pods:
        raise PodsNotFoundError(replicaset.name, namespace)

    logger.debug(
        f"Collected {len(pods)} of {len(items)} pod(s) in {namespace} "
        f"owned by replicaset {replicaset.name}"
    )
    return pods


def to_pod_record(
    item: ObjectView,
    constants: PodViewConstants = DEFAULT_CONSTANTS,
) -> PodRecord:
    """Project a pod object into a PodRecord.

    The status message is only kept for failed pods.
    """
    phase = item.phase or constants.UNKNOWN_PHASE
    message = item.message if phase == constants.FAILED_PHASE else ""
    return PodRecord(name=item.name, phase=phase, message=message)


def check_phase(phase: str, constants: PodViewConstants = DEFAULT_CONSTANTS) -> str:
    """Validate a phase filter value.

    Raises:
        InvalidPhaseError: The phase is empty or not selectable
    """
    if phase not in constants.SELECTABLE_PHASES:
        raise InvalidPhaseError(phase, constants.SELECTABLE_PHASES)
    return phase


def filter_by_phase(
    pods: PodList,
    phase: str,
    constants: PodViewConstants = DEFAULT_CONSTANTS,
) -> PodList:
    """Keep only pods in ``phase``. An empty result is not an error."""
    return pods.with_phase(check_phase(phase, constants))
