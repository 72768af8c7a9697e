"""Guarded upstream list queries.

Every list query the pipeline issues goes through ``list_objects`` here so
that cancellation, deadlines and backend failures are reported the same way
regardless of the reader in use.
"""

from __future__ import annotations

import asyncio

from loguru import logger

from .cancel import CancelToken
from .errors import OperationCancelledError, PodViewError, UpstreamError
from .k8s.reader import ObjectView, ResourceKind, ResourceReader


async def list_objects(
    reader: ResourceReader,
    kind: ResourceKind,
    *,
    namespace: str | None = None,
    field_selector: str | None = None,
    cancel: CancelToken | None = None,
) -> list[ObjectView]:
    """Run one list query under the caller's cancel token.

    Args:
        reader: Backend to query
        kind: Resource kind to list
        namespace: Namespace scope, or None for all namespaces
        field_selector: Optional server-side field selector
        cancel: Optional cancel token

    Returns:
        Objects returned by the reader

    Raises:
        OperationCancelledError: The token fired before or during the query
        UpstreamError: The reader failed
    """
    if cancel is None:
        return await _query(reader, kind, namespace, field_selector)

    task = asyncio.current_task()
    with cancel.bind():
        if cancel.cancelled:
            raise OperationCancelledError(f"cancelled before listing {kind.value}")
        deadline = asyncio.timeout(cancel.remaining())
        try:
            async with deadline:
                return await _query(reader, kind, namespace, field_selector)
        except TimeoutError:
            if deadline.expired():
                raise OperationCancelledError(
                    f"deadline exceeded while listing {kind.value}"
                ) from None
            raise
        except asyncio.CancelledError:
            if not cancel.fired:
                raise
            if task is not None:
                task.uncancel()
            raise OperationCancelledError(
                f"cancelled while listing {kind.value}"
            ) from None


async def _query(
    reader: ResourceReader,
    kind: ResourceKind,
    namespace: str | None,
    field_selector: str | None,
) -> list[ObjectView]:
    try:
        items = await reader.list_objects(
            kind, namespace=namespace, field_selector=field_selector
        )
    except PodViewError:
        raise
    except Exception as e:
        logger.debug(f"Listing {kind.value} failed: {e}")
        raise UpstreamError(
            f"failed to list {kind.value} objects: {e}", kind=kind.value
        ) from e

    logger.debug(
        f"Listed {len(items)} {kind.value} object(s) "
        f"(namespace={namespace or '<all>'}, field_selector={field_selector or '<none>'})"
    )
    return items
