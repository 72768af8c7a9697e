"""Kubectl-based implementation of ResourceReader.

Uses subprocess calls to ``kubectl get -o json`` for all queries.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass

from loguru import logger

from ..constants import DEFAULT_CONSTANTS
from .reader import ObjectView, ResourceKind, ResourceReader


@dataclass
class CommandResult:
    """Result of a command execution."""

    success: bool
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0


class KubectlCommandError(RuntimeError):
    """kubectl exited non-zero or printed something other than JSON."""

    def __init__(self, args: list[str], result: CommandResult) -> None:
        self.args_used = args
        self.result = result
        detail = result.stderr.strip() or f"exit status {result.returncode}"
        super().__init__(f"kubectl {' '.join(args)} failed: {detail}")


class KubectlReader(ResourceReader):
    """Kubernetes reader using kubectl subprocess calls.

    kubectl runs as an asyncio subprocess, so cancelling the query (or
    hitting the timeout) kills the child instead of waiting for it.
    """

    def __init__(
        self,
        *,
        kubectl: str = "kubectl",
        context: str | None = None,
        timeout: float = DEFAULT_CONSTANTS.KUBECTL_TIMEOUT,
    ) -> None:
        self._kubectl = kubectl
        self._context = context
        self._timeout = timeout

    async def _run_kubectl(self, args: list[str]) -> CommandResult:
        """Run a kubectl command asynchronously.

        The child process is killed if the query is cancelled or times out.

        Args:
            args: Command arguments (without 'kubectl' prefix)

        Returns:
            CommandResult with execution results

        Raises:
            TimeoutError: kubectl did not finish within the reader's timeout
        """
        cmd = [self._kubectl, *args]
        if self._context:
            cmd.extend(["--context", self._context])

        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), self._timeout)
        except (asyncio.CancelledError, TimeoutError):
            if proc.returncode is None:
                proc.kill()
            await proc.wait()
            raise

        return CommandResult(
            success=proc.returncode == 0,
            stdout=(stdout or b"").decode(),
            stderr=(stderr or b"").decode(),
            returncode=proc.returncode or 0,
        )

    @staticmethod
    def build_args(
        kind: ResourceKind,
        namespace: str | None,
        field_selector: str | None,
    ) -> list[str]:
        """Build the ``kubectl get`` arguments for a list query."""
        args = ["get", kind.plural, "-o", "json"]
        if namespace:
            args.extend(["-n", namespace])
        else:
            args.append("--all-namespaces")
        if field_selector:
            args.extend(["--field-selector", field_selector])
        return args

    async def list_objects(
        self,
        kind: ResourceKind,
        *,
        namespace: str | None = None,
        field_selector: str | None = None,
    ) -> list[ObjectView]:
        """List objects of one kind through ``kubectl get``."""
        args = self.build_args(kind, namespace, field_selector)
        logger.debug(f"Running kubectl {' '.join(args)}")

        result = await self._run_kubectl(args)
        if not result.success:
            raise KubectlCommandError(args, result)

        try:
            data = json.loads(result.stdout or "{}")
        except json.JSONDecodeError as e:
            raise KubectlCommandError(args, result) from e

        return [
            ObjectView.from_manifest(item, kind=kind.value)
            for item in data.get("items", [])
        ]
