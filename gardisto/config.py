"""Configuration management for Gardisto.

Options passed on the command line win; anything left unset falls back to
GARDISTO_* environment variables (a .env in the working directory is loaded
first), then to built-in defaults.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
from dotenv import load_dotenv

from gardisto.errors import ConfigurationError

__version__ = "1.0.0"

TRUTHY = {'1', 'true', 'yes', 'on'}


@dataclass
class GardistoOptions:
    """User-supplied options. None means "not given"."""
    project_path: Optional[str | Path] = None
    include: Optional[List[str]] = None
    exclude: Optional[List[str]] = None
    debug: Optional[bool] = None
    show_default_values: Optional[bool] = None
    env_file: Optional[str | Path] = None


@dataclass
class GardistoConfig:
    """Fully resolved configuration for one run."""
    project_path: Path
    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    debug: bool = False
    show_default_values: bool = False
    env_file: Optional[Path] = None


def load_env_defaults(env_path: Optional[Path] = None) -> None:
    """Load GARDISTO_* settings from .env without overriding the shell."""
    load_dotenv(env_path or Path.cwd() / ".env", override=False)


def env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in TRUTHY


def env_list(name: str) -> List[str]:
    """Comma-separated environment variable as a list."""
    return [item.strip() for item in os.getenv(name, "").split(",") if item.strip()]


def resolve_config(options: Optional[GardistoOptions] = None) -> GardistoConfig:
    """Merge options with environment fallbacks and validate paths.

    Args:
        options: Explicit options, any field may be None

    Returns:
        GardistoConfig with an absolute project path

    Raises:
        ConfigurationError: If the project path or env file is invalid
    """
    options = options or GardistoOptions()

    project_path = Path(options.project_path or Path.cwd()).resolve()
    if not project_path.exists():
        raise ConfigurationError(
            f"Project path does not exist: {project_path}",
            {'project_path': str(project_path)}
        )
    if not project_path.is_dir():
        raise ConfigurationError(
            f"Project path is not a directory: {project_path}",
            {'project_path': str(project_path)}
        )

    env_file = options.env_file or os.getenv("GARDISTO_ENV_FILE") or None
    if env_file is not None:
        env_file = Path(env_file)
        if not env_file.is_absolute() and not env_file.exists():
            env_file = project_path / env_file
        if not env_file.is_file():
            raise ConfigurationError(
                f"Env file not found: {env_file}",
                {'env_file': str(env_file)}
            )

    return GardistoConfig(
        project_path=project_path,
        include=list(options.include) if options.include else env_list("GARDISTO_INCLUDE"),
        exclude=list(options.exclude) if options.exclude else env_list("GARDISTO_EXCLUDE"),
        debug=options.debug if options.debug is not None else env_flag("GARDISTO_DEBUG"),
        show_default_values=(
            options.show_default_values if options.show_default_values is not None
            else env_flag("GARDISTO_SHOW_DEFAULT_VALUES")
        ),
        env_file=env_file,
    )
