"""
Build System - Output directory and rebuild dependencies for generated icons

Build scripts usually get their output directory from an environment
variable and tell the driving build tool which inputs should trigger a
rebuild. EnvBuildSystem covers that convention:

    OUT_DIR=build/gen python make_icon.py
    rerun-if-changed=assets/icon-32.png
    rerun-if-changed=assets/icon-256.png
"""

import logging
import os
import sys
from pathlib import Path
from typing import Mapping, Optional, TextIO

from .errors import BuildSystemError

logger = logging.getLogger(__name__)

DEFAULT_OUT_DIR_VAR = "OUT_DIR"
RERUN_PREFIX = "rerun-if-changed="


class BuildSystem:
    """Interface to whatever tool drives generated-file builds."""

    def output_dir(self) -> Path:
        """Directory generated files are written to."""
        raise NotImplementedError

    def declare_dependency(self, path: Path) -> None:
        """Ask the build tool to rebuild when path changes."""
        raise NotImplementedError


class EnvBuildSystem(BuildSystem):
    """Reads the output directory from the environment and prints dependencies."""

    def __init__(
        self,
        env_var: str = DEFAULT_OUT_DIR_VAR,
        stream: Optional[TextIO] = None,
        environ: Optional[Mapping[str, str]] = None
    ):
        """
        Initialize build system.

        Args:
            env_var: Environment variable holding the output directory
            stream: Where dependency lines are written (default: stdout)
            environ: Environment mapping (default: os.environ)
        """
        self.env_var = env_var
        self.stream = stream
        self.environ = os.environ if environ is None else environ

    def output_dir(self) -> Path:
        value = self.environ.get(self.env_var)
        if not value:
            raise BuildSystemError(
                f"{self.env_var} environment variable is required.\n"
                f"Hint: build_to_generated_path is intended to be called from build scripts "
                f"that set {self.env_var}."
            )
        return Path(value)

    def declare_dependency(self, path: Path) -> None:
        stream = self.stream or sys.stdout
        stream.write(f"{RERUN_PREFIX}{path}\n")
        logger.debug(f"Declared build dependency: {path}")
