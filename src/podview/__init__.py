"""podview: list the pods behind a Kubernetes Deployment.

Walks Deployment -> active ReplicaSet -> Pods using list queries and returns
a compact record per pod, optionally filtered by phase.

Example:
    from podview import PodViewClient
    from podview.k8s import Kr8sReader

    client = PodViewClient(Kr8sReader(), "kube-state-metrics", "monitoring")
    print(client.get_pods().to_json())

Logging goes through loguru and is disabled by default; call
``logger.enable("podview")`` to see it.
"""

from loguru import logger

from .cancel import CancelToken
from .client import AsyncPodViewClient, PodViewClient
from .constants import DEFAULT_CONSTANTS, PodViewConstants
from .errors import (
    DeploymentNotFoundError,
    EmptyArgumentError,
    InvalidPhaseError,
    OperationCancelledError,
    PodsNotFoundError,
    PodViewError,
    ReplicaSetNotFoundError,
    ResourceNotFoundError,
    UpstreamError,
)
from .models import DeploymentInfo, PodList, PodPhase, PodRecord

__version__ = "0.1.0"

logger.disable("podview")

__all__ = [
    # Clients
    "AsyncPodViewClient",
    "PodViewClient",
    "CancelToken",
    # Models
    "DeploymentInfo",
    "PodList",
    "PodPhase",
    "PodRecord",
    # Constants
    "DEFAULT_CONSTANTS",
    "PodViewConstants",
    # Errors
    "PodViewError",
    "EmptyArgumentError",
    "InvalidPhaseError",
    "ResourceNotFoundError",
    "DeploymentNotFoundError",
    "ReplicaSetNotFoundError",
    "PodsNotFoundError",
    "UpstreamError",
    "OperationCancelledError",
]
