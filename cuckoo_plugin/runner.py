"""Execution of planned generator commands with up-to-date checks."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Sequence

from .logging import get_logger
from .models import CommandPlan


class GeneratorRunError(RuntimeError):
    """Raised when the generator process cannot be started or exits non-zero."""


def is_up_to_date(plan: CommandPlan) -> bool:
    """Return True when every output exists and is newer than every input.

    Declared inputs that do not exist, such as an absent ``cuckoo.json``, do not
    make the plan stale.
    """
    if not plan.output_files:
        return False
    try:
        oldest_output = min(path.stat().st_mtime for path in plan.output_files)
    except FileNotFoundError:
        return False
    for path in plan.input_files:
        try:
            modified = path.stat().st_mtime
        except FileNotFoundError:
            continue
        if modified > oldest_output:
            return False
    return True


class CommandRunner:
    """Runs a :class:`CommandPlan` when its outputs are stale."""

    def __init__(self, runner: Callable[..., int] | None = None) -> None:
        self._runner = runner or self._default_runner
        self.logger = get_logger("runner")

    def run(self, plan: CommandPlan, *, force: bool = False, cwd: Path | None = None) -> bool:
        """Execute ``plan`` and return True when the generator actually ran."""
        if not force and is_up_to_date(plan):
            self.logger.info("%s skipped: outputs are up to date", plan.display_name)
            return False

        for output in plan.output_files:
            output.parent.mkdir(parents=True, exist_ok=True)

        args = plan.command_line()
        self.logger.info("%s", plan.display_name)
        self.logger.debug("Command: %s", subprocess.list2cmdline(args))
        returncode = self._runner(args, cwd=cwd)
        if returncode != 0:
            raise GeneratorRunError(
                f"{plan.display_name} failed with exit code {returncode}"
            )
        return True

    @staticmethod
    def _default_runner(args: Sequence[str], *, cwd: Path | None = None) -> int:
        try:
            completed = subprocess.run(
                list(args),
                cwd=str(cwd) if cwd is not None else None,
                check=False,
            )
        except FileNotFoundError as exc:
            raise GeneratorRunError(f"Unable to start '{args[0]}': {exc}") from exc
        return completed.returncode


__all__ = ["CommandRunner", "GeneratorRunError", "is_up_to_date"]
