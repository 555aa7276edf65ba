from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from pathlib import Path

from ..errors import CommandError

logger = logging.getLogger(__name__)


def run_command(cmd: list[str], *, cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    # LBYL: a missing tool surfaces as CommandError rather than FileNotFoundError
    executable = shutil.which(cmd[0])
    if executable is None:
        raise CommandError(cmd, None, f"'{cmd[0]}' was not found on PATH")

    logger.debug("Running %s (cwd=%s)", shlex.join(cmd), cwd or ".")
    result = subprocess.run(
        [executable, *cmd[1:]],
        cwd=cwd,
        check=False,
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        raise CommandError(cmd, result.returncode, result.stderr or result.stdout)
    return result
