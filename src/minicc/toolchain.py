"""
External Toolchain
==================

Wrappers around the system C compiler driver, which minicc uses for the
two steps it does not implement itself:

1. Preprocessing: `gcc -E -P hello.c -o hello.i`
2. Assembling and linking: `gcc hello.s -o hello`

File Naming
-----------
| File      | Produced by   | Lifetime                            |
|-----------|---------------|-------------------------------------|
| hello.i   | preprocess()  | deleted once read                   |
| hello.s   | emitter       | deleted after linking unless kept   |
| hello     | link()        | final output                        |

The driver executable defaults to `gcc` and can be replaced with the
MINICC_CC environment variable or ToolchainConfig.cc.
"""

import logging
import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from minicc.errors import ToolchainError

logger = logging.getLogger(__name__)

CC_ENV_VAR = "MINICC_CC"
DEFAULT_CC = "gcc"


@dataclass
class ToolchainConfig:
    """
    Settings for the external compiler driver.

    Attributes:
        cc: Driver executable (default: $MINICC_CC or gcc)
        preprocess_args: Extra arguments for the preprocessing step
        link_args: Extra arguments for the assemble/link step
        timeout: Seconds to wait for each tool invocation
    """
    cc: str = field(default_factory=lambda: os.environ.get(CC_ENV_VAR, DEFAULT_CC))
    preprocess_args: list[str] = field(default_factory=list)
    link_args: list[str] = field(default_factory=list)
    timeout: float = 60.0


def preprocessed_path(source: Path) -> Path:
    """hello.c -> hello.i"""
    return source.with_suffix(".i")


def assembly_path(source: Path) -> Path:
    """hello.c -> hello.s"""
    return source.with_suffix(".s")


def executable_path(source: Path) -> Path:
    """hello.c -> hello"""
    return source.with_suffix("")


def preprocess(source: Path, config: Optional[ToolchainConfig] = None) -> str:
    """
    Run the C preprocessor over source and return the expanded text.

    The intermediate .i file is removed before returning, whether or not
    it could be read.

    Raises:
        ToolchainError: If the preprocessor fails
    """
    config = config or ToolchainConfig()
    output = preprocessed_path(source)
    cmd = [config.cc, "-E", "-P", *config.preprocess_args, str(source), "-o", str(output)]

    try:
        _run(cmd, config)
        return output.read_text(encoding="utf-8")
    finally:
        output.unlink(missing_ok=True)


def link(assembly: Path, output: Path, config: Optional[ToolchainConfig] = None) -> Path:
    """
    Assemble and link an assembly file into an executable.

    Returns:
        Path of the executable

    Raises:
        ToolchainError: If assembling or linking fails
    """
    config = config or ToolchainConfig()
    cmd = [config.cc, *config.link_args, str(assembly), "-o", str(output)]
    _run(cmd, config)
    return output


def _run(cmd: Sequence[str], config: ToolchainConfig) -> subprocess.CompletedProcess:
    logger.debug(f"running: {' '.join(cmd)}")
    try:
        result = subprocess.run(
            list(cmd),
            capture_output=True,
            text=True,
            timeout=config.timeout,
        )
    except subprocess.TimeoutExpired:
        raise ToolchainError(f"{config.cc} timed out after {config.timeout}s", command=cmd)
    except FileNotFoundError:
        raise ToolchainError(
            f"'{config.cc}' not found - is a C toolchain installed? "
            f"(set {CC_ENV_VAR} to choose another driver)",
            command=cmd,
        )

    if result.returncode != 0:
        raise ToolchainError(
            f"{config.cc} failed",
            command=cmd,
            return_code=result.returncode,
            stderr=result.stderr,
        )
    return result
