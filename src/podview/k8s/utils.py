"""Utility functions for the Kubernetes layer.

Provides a helper for running async code in sync contexts.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
from collections.abc import Coroutine
from typing import Any


def run_sync[T](coro: Coroutine[Any, Any, T]) -> T:
    """Run an async coroutine in a blocking sync context.

    This is how the blocking PodViewClient drives the async lookup pipeline.

    Args:
        coro: The coroutine to execute

    Returns:
        The result of the coroutine

    Example:
        from podview.k8s import Kr8sReader, ResourceKind, run_sync

        reader = Kr8sReader()
        pods = run_sync(reader.list_objects(ResourceKind.POD, namespace="prod"))
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        # No running loop, create a new one
        return asyncio.run(coro)

    # Already inside a running loop (e.g. a notebook or an async caller):
    # run on a fresh loop in a worker thread to avoid blocking re-entry.
    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
        future = pool.submit(asyncio.run, coro)
        return future.result()
