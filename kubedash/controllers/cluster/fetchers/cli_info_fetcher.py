"""CLI info fetcher - detects kubectl and helm versions on PATH."""

from __future__ import annotations

import asyncio
import json
import logging
import subprocess

from kubedash.constants.timeouts import CLI_VERSION_TIMEOUT
from kubedash.models.core.context_info import CliToolInfo

logger = logging.getLogger(__name__)


class CliInfoFetcher:
    """Fetches versions of the command line tools the dashboard relies on."""

    _COMMANDS: tuple[tuple[str, tuple[str, ...]], ...] = (
        ("kubectl", ("kubectl", "version", "--client", "-o", "json")),
        ("helm", ("helm", "version", "--short")),
    )

    def __init__(self, timeout: int = CLI_VERSION_TIMEOUT) -> None:
        self.timeout = timeout

    def _run_sync(self, cmd: tuple[str, ...]) -> str | None:
        try:
            result = subprocess.run(
                list(cmd),
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            logger.debug("%s unavailable: %s", cmd[0], exc)
            return None
        if result.returncode != 0:
            return None
        return result.stdout.strip()

    @staticmethod
    def parse_version(name: str, output: str) -> str:
        """Extract a short version string from the tool's output."""
        if name == "kubectl":
            try:
                data = json.loads(output)
            except json.JSONDecodeError:
                return output.splitlines()[0] if output else ""
            return (data.get("clientVersion") or {}).get("gitVersion", "")
        # helm --short prints "v3.14.0+g3fc9f4b"
        return output.split("+", 1)[0]

    async def fetch_one(self, name: str, cmd: tuple[str, ...]) -> CliToolInfo:
        output = await asyncio.to_thread(self._run_sync, cmd)
        if not output:
            return CliToolInfo(name=name)
        version = self.parse_version(name, output) or "Not found"
        return CliToolInfo(name=name, version=version, available=True)

    async def fetch(self) -> list[CliToolInfo]:
        """Return one CliToolInfo per known tool, in a stable order."""
        return list(
            await asyncio.gather(
                *(self.fetch_one(name, cmd) for name, cmd in self._COMMANDS)
            )
        )


__all__ = ["CliInfoFetcher"]
