import shlex
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

@dataclass
class CmdResult:
    exit_code: int
    stdout: str
    stderr: str

def split_cmd(cmd: str | Sequence[str]) -> list[str]:
    """Accept either ``"java -jar checkstyle.jar"`` or an argv list."""
    if isinstance(cmd, str):
        return shlex.split(cmd)
    return list(cmd)

def executable_available(cmd: Sequence[str]) -> bool:
    return bool(cmd) and shutil.which(cmd[0]) is not None

def run_cmd(cmd: Sequence[str], cwd: Path, timeout_sec: int | None = None) -> CmdResult:
    # timeout_sec=None waits forever; a hung analyzer hangs the build
    p = subprocess.run(
        list(cmd),
        cwd=str(cwd),
        capture_output=True,
        text=True,
        timeout=timeout_sec,
    )
    return CmdResult(p.returncode, p.stdout or "", p.stderr or "")
