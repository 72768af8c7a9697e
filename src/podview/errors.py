"""Exceptions raised by podview.

Every failure surfaces as a subclass of PodViewError so callers can catch
the whole family, or a single kind by class.
"""

from __future__ import annotations


class PodViewError(Exception):
    """Base class for all podview errors."""


class EmptyArgumentError(PodViewError, ValueError):
    """A required string argument was empty."""

    def __init__(self, argument: str) -> None:
        self.argument = argument
        super().__init__(f"given string argument cannot be empty: {argument}")


class InvalidPhaseError(PodViewError, ValueError):
    """The requested phase is not one callers may filter on."""

    def __init__(self, phase: str, allowed: tuple[str, ...]) -> None:
        self.phase = phase
        self.allowed = allowed
        super().__init__(
            f"invalid pod phase {phase!r}; expected one of {', '.join(allowed)}"
        )


class ResourceNotFoundError(PodViewError, LookupError):
    """A stage of the ownership lookup matched nothing."""


class DeploymentNotFoundError(ResourceNotFoundError):
    """No Deployment matched the configured name."""

    def __init__(self, name: str, namespace: str | None = None) -> None:
        self.name = name
        self.namespace = namespace
        where = f" in namespace {namespace!r}" if namespace else ""
        super().__init__(f"no deployment found with name {name!r}{where}")


class ReplicaSetNotFoundError(ResourceNotFoundError):
    """No ReplicaSet is the active generation of the Deployment."""

    def __init__(self, deployment: str, namespace: str) -> None:
        self.deployment = deployment
        self.namespace = namespace
        super().__init__(
            f"no active replicaset found for deployment {namespace}/{deployment}"
        )


class PodsNotFoundError(ResourceNotFoundError):
    """The active ReplicaSet owns no pods."""

    def __init__(self, replicaset: str, namespace: str) -> None:
        self.replicaset = replicaset
        self.namespace = namespace
        super().__init__(f"no pods found for replicaset {namespace}/{replicaset}")


class UpstreamError(PodViewError):
    """The Kubernetes API (or kubectl) failed.

    The underlying exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, *, kind: str | None = None) -> None:
        self.kind = kind
        super().__init__(message)


class OperationCancelledError(PodViewError):
    """The caller's cancel token fired or its deadline passed."""
