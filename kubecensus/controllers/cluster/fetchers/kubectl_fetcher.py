"""Kubectl fetcher for cluster controller - lists namespaces and pods via kubectl."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from kubecensus.constants.defaults import KUBECTL_BINARY_DEFAULT
from kubecensus.constants.timeouts import (
    CLUSTER_REQUEST_TIMEOUT,
    KUBECTL_COMMAND_TIMEOUT,
)
from kubecensus.controllers.cluster.parsers import NamespaceParser, PodParser
from kubecensus.errors import ClusterQueryError
from kubecensus.models.pod_info import PodInfo

logger = logging.getLogger(__name__)


class ClusterQueryService(Protocol):
    """Read-only view of the cluster used by the query cache."""

    async def list_namespaces(self) -> list[str]: ...

    async def list_pods(self) -> list[PodInfo]: ...


class KubectlFetcher:
    """Answers cluster queries by shelling out to kubectl."""

    _PREFERRED_ERROR_TOKENS = (
        "unable to connect to the server",
        "you must be logged in",
        "context deadline exceeded",
        "timed out",
        "certificate",
        "no such host",
        "forbidden",
        "unauthorized",
    )

    def __init__(
        self,
        context: str | None = None,
        *,
        binary: str = KUBECTL_BINARY_DEFAULT,
        timeout_seconds: int = KUBECTL_COMMAND_TIMEOUT,
        request_timeout: str = CLUSTER_REQUEST_TIMEOUT,
    ) -> None:
        """Initialize the kubectl fetcher.

        Args:
            context: Optional Kubernetes context name
            binary: kubectl executable to run
            timeout_seconds: Process-level timeout per command
            request_timeout: Value for kubectl's --request-timeout flag
        """
        self.context = context
        self.binary = binary
        self.timeout_seconds = timeout_seconds
        self.request_timeout = request_timeout
        self._pod_parser = PodParser()
        self._namespace_parser = NamespaceParser()

    @classmethod
    def _summarize_error(cls, raw_message: str) -> str:
        """Extract a concise error line from kubectl output."""
        lines = [line.strip() for line in raw_message.splitlines() if line.strip()]
        if not lines:
            return "kubectl command failed"

        selected_line = lines[-1]
        for line in reversed(lines):
            lower_line = line.lower()
            if line.startswith("error:") or any(
                token in lower_line for token in cls._PREFERRED_ERROR_TOKENS
            ):
                selected_line = line
                break

        cleaned = selected_line.removeprefix("error:").strip()
        if len(cleaned) > 160:
            return f"{cleaned[:157].rstrip()}..."
        return cleaned or "kubectl command failed"

    def _build_command(self, args: tuple[str, ...]) -> list[str]:
        cmd = [self.binary]
        if self.context:
            cmd.extend(["--context", self.context])
        cmd.extend(args)
        cmd.append(f"--request-timeout={self.request_timeout}")
        return cmd

    @staticmethod
    async def _kill(proc: asyncio.subprocess.Process) -> None:
        if proc.returncode is None:
            try:
                proc.kill()
            except ProcessLookupError:
                pass
        await proc.wait()

    async def run_kubectl(self, args: tuple[str, ...]) -> str:
        """Run kubectl as a child process and return its stdout.

        The child is killed when the command times out or the awaiting task is
        cancelled, so no kubectl outlives its query.
        """
        cmd = self._build_command(args)
        logger.debug("Running kubectl %s", " ".join(args))
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise ClusterQueryError(f"cannot run {self.binary}: {exc}") from exc

        try:
            stdout, stderr = await asyncio.wait_for(
                proc.communicate(), timeout=self.timeout_seconds
            )
        except TimeoutError as exc:
            await self._kill(proc)
            raise ClusterQueryError(
                f"kubectl {' '.join(args)} timed out after {self.timeout_seconds}s"
            ) from exc
        except asyncio.CancelledError:
            logger.debug("Killing cancelled kubectl %s", " ".join(args))
            await self._kill(proc)
            raise

        if proc.returncode != 0:
            output = stderr.decode(errors="replace") + stdout.decode(errors="replace")
            raise ClusterQueryError(
                f"kubectl {' '.join(args)} failed (exit {proc.returncode}): "
                f"{self._summarize_error(output)}"
            )
        return stdout.decode(errors="replace")

    async def list_namespaces(self) -> list[str]:
        """List namespace names in the cluster."""
        output = await self.run_kubectl(("get", "namespaces", "-o", "json"))
        return self._namespace_parser.parse_namespaces(output)

    async def list_pods(self) -> list[PodInfo]:
        """List pods across all namespaces with their container images."""
        output = await self.run_kubectl(
            ("get", "pods", "--all-namespaces", "-o", "json")
        )
        return self._pod_parser.parse_pods(output)
