"""
Configuration for the code generator pipeline.

Generation options plus formatter and output options, loadable from a
JSON configuration file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to validate code before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class FormatterConfig:
    """Configuration for the rustfmt post-processing step."""

    # Whether formatting is enabled
    enabled: bool = False

    # Rust edition passed to rustfmt
    edition: str = "2021"

    # Seconds before the formatter process is abandoned
    timeout: int = 30


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Type names (sanitized identifiers) to leave out of the output
    ignore_types: list[str] = field(default_factory=list)

    # Derives added to every declaration, after the default ones
    extra_derives: list[str] = field(default_factory=list)

    # Add generation comment at top of file
    add_generation_comment: bool = True

    # Fail when any diagnostic was reported
    strict: bool = False

    formatter: FormatterConfig = field(default_factory=FormatterConfig)

    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "formatter" and isinstance(v, dict):
                config.formatter = FormatterConfig(**v)
            elif k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.ERROR_IF_EXISTS)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    mode=mode,
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "ignore_types": self.ignore_types,
            "extra_derives": self.extra_derives,
            "add_generation_comment": self.add_generation_comment,
            "strict": self.strict,
            "formatter": {
                "enabled": self.formatter.enabled,
                "edition": self.formatter.edition,
                "timeout": self.formatter.timeout,
            },
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
