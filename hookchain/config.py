"""
Configuration management for hookchain.

Supports:
- Environment variables
- Config file (.hookchain.toml)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional
import sys

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from hookchain.errors import ConfigError
from hookchain.models import HookEvent


CONFIG_FILE_NAME = ".hookchain.toml"
ENV_PREFIX = "HOOKCHAIN_"

DEFAULT_FILE_EXTENSIONS = [".c", ".h", ".cpp", ".hpp"]


def _parse_bool(value: str) -> bool:
    return value.lower() in ("1", "true", "yes")


@dataclass
class HookchainConfig:
    """Configuration for hookchain."""

    # Dispatcher settings
    pre_commit_hooks: list[str] = field(default_factory=list)
    pre_push_hooks: list[str] = field(default_factory=list)
    hooks_dir: Optional[str] = None  # Defaults to the repository's hooks directory

    # clang-format hook settings
    clang_format: Optional[str] = None  # Defaults to clang-format on PATH
    clang_format_style: str = "file"
    color_diff: Optional[str] = None  # Defaults to colordiff on PATH
    parse_extensions: bool = True
    file_extensions: list[str] = field(default_factory=lambda: list(DEFAULT_FILE_EXTENSIONS))
    delete_old_patches: bool = False
    patch_dir: Optional[str] = None  # Defaults to $TMPDIR

    # Where the config was loaded from, for diagnostics
    source: Optional[Path] = None

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "HookchainConfig":
        """
        Load configuration from multiple sources.

        Priority (highest to lowest):
        1. Environment variables
        2. Config file
        3. Defaults
        """
        config_dict: dict[str, Any] = {}

        # Load from config file
        if config_path is None:
            config_path = cls._find_config_file()

        if config_path and config_path.exists():
            with open(config_path, "rb") as f:
                file_config = tomllib.load(f)
                config_dict.update(cls._flatten_config(file_config))
            config_dict["source"] = config_path

        # Load from environment variables
        env_config = cls._load_from_env()
        config_dict.update(env_config)

        return cls(**config_dict)

    @classmethod
    def _find_config_file(cls) -> Optional[Path]:
        """Find config file by walking up from current directory."""
        current = Path.cwd()

        while current != current.parent:
            config_file = current / CONFIG_FILE_NAME
            if config_file.exists():
                return config_file
            current = current.parent

        # Check home directory
        home_config = Path.home() / CONFIG_FILE_NAME
        if home_config.exists():
            return home_config

        return None

    @classmethod
    def _flatten_config(cls, config: dict[str, Any]) -> dict[str, Any]:
        """Flatten nested config to match dataclass fields."""
        result: dict[str, Any] = {}

        if "pre-commit" in config:
            result["pre_commit_hooks"] = list(config["pre-commit"].get("hooks", []))

        if "pre-push" in config:
            result["pre_push_hooks"] = list(config["pre-push"].get("hooks", []))

        if "dispatch" in config:
            result["hooks_dir"] = config["dispatch"].get("hooks_dir")

        if "clang-format" in config:
            section = config["clang-format"]
            result["clang_format"] = section.get("binary")
            result["clang_format_style"] = section.get("style", "file")
            result["color_diff"] = section.get("color_diff")
            result["parse_extensions"] = section.get("parse_extensions", True)
            result["file_extensions"] = list(
                section.get("extensions", DEFAULT_FILE_EXTENSIONS)
            )
            result["delete_old_patches"] = section.get("delete_old_patches", False)
            result["patch_dir"] = section.get("patch_dir")

        return result

    @classmethod
    def _load_from_env(cls) -> dict[str, Any]:
        """Load configuration from environment variables."""
        result: dict[str, Any] = {}

        mappings = {
            "PRE_COMMIT_HOOKS": ("pre_commit_hooks", str.split),
            "PRE_PUSH_HOOKS": ("pre_push_hooks", str.split),
            "HOOKS_DIR": "hooks_dir",
            "CLANG_FORMAT": "clang_format",
            "CLANG_FORMAT_STYLE": "clang_format_style",
            "COLOR_DIFF": "color_diff",
            "PARSE_EXTENSIONS": ("parse_extensions", _parse_bool),
            "FILE_EXTENSIONS": ("file_extensions", str.split),
            "DELETE_OLD_PATCHES": ("delete_old_patches", _parse_bool),
            "PATCH_DIR": "patch_dir",
        }

        for env_suffix, mapping in mappings.items():
            env_var = f"{ENV_PREFIX}{env_suffix}"
            value = os.environ.get(env_var)

            if value is not None:
                if isinstance(mapping, tuple):
                    field_name, converter = mapping
                    result[field_name] = converter(value)
                else:
                    result[mapping] = value

        return result

    def hooks_for(self, event: HookEvent) -> list[str]:
        """Return the ordered hook list for a lifecycle event."""
        if event is HookEvent.PRE_COMMIT:
            return list(self.pre_commit_hooks)
        return list(self.pre_push_hooks)

    def validate(self) -> None:
        """Check the configuration once, before any hook runs."""
        for event in HookEvent:
            for name in self.hooks_for(event):
                if not name or not name.strip():
                    raise ConfigError(f"Empty hook name in the {event.value} hook list")
                if "/" in name or os.sep in name:
                    raise ConfigError(
                        f"Hook name '{name}' must be a file name inside the hooks "
                        "directory, not a path"
                    )

        for ext in self.file_extensions:
            if not ext.startswith(".") or len(ext) < 2:
                raise ConfigError(f"File extension '{ext}' must look like '.cpp'")

        if not self.clang_format_style.strip():
            raise ConfigError("clang-format style must not be empty")

    def describe_source(self) -> str:
        """Human readable name of where hook lists are configured."""
        if self.source:
            return str(self.source)
        return f"{CONFIG_FILE_NAME} (or the {ENV_PREFIX}PRE_COMMIT_HOOKS variable)"

    def to_toml(self) -> str:
        """Generate TOML configuration string."""

        def _list(values: list[str]) -> str:
            return "[" + ", ".join(f'"{v}"' for v in values) + "]"

        lines = [
            "# hookchain configuration",
            "# Generated by: hookchain init",
            "",
            "[pre-commit]",
            "# Hooks run in order; each must be an executable in the hooks directory.",
            f"hooks = {_list(self.pre_commit_hooks)}",
            "",
            "[pre-push]",
            f"hooks = {_list(self.pre_push_hooks)}",
            "",
            "[dispatch]",
            '# hooks_dir = ".git/hooks"',
            "",
            "[clang-format]",
            '# binary = "/usr/bin/clang-format"  # Or set HOOKCHAIN_CLANG_FORMAT env var',
            f'style = "{self.clang_format_style}"',
            '# color_diff = "/usr/bin/colordiff"',
            f"parse_extensions = {str(self.parse_extensions).lower()}",
            f"extensions = {_list(self.file_extensions)}",
            f"delete_old_patches = {str(self.delete_old_patches).lower()}",
            '# patch_dir = "/tmp"',
        ]
        return "\n".join(lines) + "\n"
