"""Read-only views over the environment the scanned project will run with.

The checker never touches os.environ directly; it receives one of these so
tests can pass a fixture map and the CLI can layer a .env file on top of the
real process environment.
"""
import os
from pathlib import Path
from typing import Dict, Mapping, Optional
from dotenv import dotenv_values


class ProcessEnvironment:
    """The live process environment, read on every lookup."""

    def get(self, name: str) -> Optional[str]:
        return os.environ.get(name)


class StaticEnvironment:
    """Fixed name -> value map."""

    def __init__(self, values: Optional[Mapping[str, Optional[str]]] = None):
        self._values: Dict[str, Optional[str]] = dict(values or {})

    def get(self, name: str) -> Optional[str]:
        return self._values.get(name)


class DotenvEnvironment:
    """Values from a .env file, with the fallback environment taking precedence.

    Matches load_dotenv(override=False): a variable exported in the shell
    wins over the same key in the file. The file is read once, os.environ
    is never modified.
    """

    def __init__(self, env_file: str | Path, fallback=None):
        self.env_file = Path(env_file)
        self.fallback = fallback if fallback is not None else ProcessEnvironment()
        self._file_values = dotenv_values(self.env_file)

    def get(self, name: str) -> Optional[str]:
        value = self.fallback.get(name)
        if value is not None:
            return value
        return self._file_values.get(name)


def build_environment(env_file: Optional[str | Path] = None):
    """Process environment, optionally layered over a .env file."""
    if env_file:
        return DotenvEnvironment(env_file)
    return ProcessEnvironment()
