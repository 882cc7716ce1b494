from __future__ import annotations

import shutil
import subprocess
import sys
from typing import Iterable


def run_logged(
    cmd: Iterable[str], *, check: bool = True, **kwargs: object
) -> subprocess.CompletedProcess[str]:
    """
    Run a subprocess with captured output, mirroring it to the caller on failure.
    Returns the CompletedProcess; raises CalledProcessError when check=True.
    """
    result = subprocess.run(
        list(cmd),
        capture_output=True,
        text=True,
        **kwargs,  # type: ignore[arg-type]
    )
    if result.returncode != 0:
        if result.stdout:
            sys.stdout.write(result.stdout)
        if result.stderr:
            sys.stderr.write(result.stderr)
        if check:
            raise subprocess.CalledProcessError(
                result.returncode, result.args, output=result.stdout, stderr=result.stderr
            )
    return result


def missing_commands(commands: Iterable[str]) -> list[str]:
    return [name for name in commands if shutil.which(name) is None]
