"""
rustfmt formatter for Rust code.
"""

from __future__ import annotations

import logging
import subprocess

from ..config import FormatterConfig
from ..errors import RenderError
from .base import Formatter

logger = logging.getLogger(__name__)


class RustfmtFormatter(Formatter):
    """Formatter piping code through rustfmt."""

    def __init__(self, executable: str = "rustfmt"):
        self.executable = executable
        self._available = None

    def is_available(self) -> bool:
        """Check if rustfmt is installed."""
        if self._available is None:
            try:
                result = subprocess.run(
                    [self.executable, "--version"],
                    capture_output=True,
                    text=True,
                    timeout=5,
                )
                self._available = result.returncode == 0
            except (subprocess.SubprocessError, FileNotFoundError):
                self._available = False
        return self._available

    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format Rust code using rustfmt (stdin to stdout).

        Args:
            code: Rust source code to format
            config: Formatter configuration

        Returns:
            Formatted code, or the code unchanged when rustfmt is missing

        Raises:
            RenderError: If rustfmt rejects the code or times out
        """
        if not self.is_available():
            logger.warning("%s is not available, leaving generated code unformatted", self.executable)
            return code

        cmd = [self.executable, "--emit", "stdout", "--edition", config.edition]
        try:
            result = subprocess.run(
                cmd,
                input=code,
                capture_output=True,
                text=True,
                timeout=config.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise RenderError(f"{self.executable} timed out after {config.timeout}s") from e

        if result.returncode != 0:
            raise RenderError(f"{self.executable} failed with exit code {result.returncode}: {result.stderr.strip()}")

        logger.debug("Formatted %d bytes with %s", len(code), self.executable)
        return result.stdout
