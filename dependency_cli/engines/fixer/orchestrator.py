"""FixOrchestrator: uninstall / update / audit fix / dedupe."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import structlog

from dependency_cli.core.config import Settings
from dependency_cli.core.process import CommandRunner, run_command
from dependency_cli.engines.fixer.models import FixCategory, FixResult, FixSelection
from dependency_cli.engines.usage_scanner.protection import ProtectedPackageSet
from dependency_cli.engines.usage_scanner.scanner import scan_usage
from dependency_cli.exceptions import CommandError, DependencyCliError, FixActionError

log = structlog.get_logger("dependency_cli.fixer")


def batched(items: list[str], size: int) -> Iterator[list[str]]:
    for i in range(0, len(items), size):
        yield items[i : i + size]


class FixOrchestrator:
    """Apply remediation actions for the selected categories.

    Each category is attempted independently; a failure is recorded in its
    :class:`FixResult` and the remaining categories still run.
    """

    def __init__(
        self,
        project_root: Path,
        protected: ProtectedPackageSet,
        settings: Settings,
        runner: CommandRunner = run_command,
    ) -> None:
        self._root = project_root
        self._protected = protected
        self._settings = settings
        self._runner = runner
        self.on_start: Callable[[FixCategory], None] | None = None

    async def apply(self, selection: FixSelection) -> list[FixResult]:
        if selection.force:
            log.warning("fixer.force_ignored", detail="protected packages are still kept")

        results: list[FixResult] = []
        for category in selection.categories:
            if self.on_start is not None:
                self.on_start(category)
            result = FixResult(category=category, success=False)
            try:
                if category == "unused":
                    result.removed, result.kept_protected = await self.remove_unused()
                elif category == "outdated":
                    await self._npm_action(["update"])
                elif category == "vulnerabilities":
                    await self._npm_action(["audit", "fix"])
                else:
                    await self._npm_action(["dedupe"])
                result.success = True
            except DependencyCliError as exc:
                result.error = str(exc)
                log.error("fixer.category_failed", category=category, error=str(exc))
            results.append(result)
        return results

    async def remove_unused(self) -> tuple[list[str], list[str]]:
        """Uninstall removable unused packages in batches.

        Returns ``(removed, kept_protected)``. The first failing batch raises
        ``FixActionError``; earlier batches stay removed and later batches are
        not attempted.
        """
        usage = await scan_usage(
            self._root, self._protected, settings=self._settings, runner=self._runner
        )
        to_remove = usage.all_unused
        kept = usage.protected_unused
        if not to_remove:
            log.info("fixer.nothing_to_remove", kept_protected=kept)
            return [], kept

        log.info("fixer.removing", packages=to_remove)
        removed: list[str] = []
        for batch in batched(to_remove, self._settings.batch_size):
            try:
                await self._npm_action(["uninstall", *batch], capture=True)
            except FixActionError as exc:
                raise FixActionError(f"Failed to remove: {', '.join(batch)} ({exc})") from exc
            removed.extend(batch)
        return removed, kept

    async def _npm_action(self, npm_args: list[str], *, capture: bool = False) -> None:
        args = [self._settings.npm, *npm_args]
        try:
            result = await self._runner(
                args, cwd=self._root, timeout=self._settings.timeout, capture=capture
            )
        except CommandError as exc:
            raise FixActionError(str(exc)) from exc
        if not result.ok:
            detail = result.stderr.strip().splitlines()[-1] if result.stderr.strip() else ""
            msg = f"{' '.join(args)} exited with code {result.exit_code}"
            raise FixActionError(f"{msg}: {detail}" if detail else msg)
        log.info("fixer.action_done", cmd=args)
