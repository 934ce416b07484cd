from typing import Mapping, Self
import os

from dotenv import dotenv_values

from ..errors import ConfigurationError

class Environment():
    """Variables available to `{{ KEY }}` placeholders in configuration files"""

    def __init__(self):
        self._env: dict[str, str] = {}

    def add_value(self, key: str, value: str, overwrite=False):
        if key in self._env:
            if not overwrite:
                raise ValueError(f"Multiple entries for variable: {key}")
        self._env[key] = value

    def add_values(self, values: Mapping[str, str | None], overwrite=False):
        for k, v in values.items():
            self.add_value(k, v or "", overwrite=overwrite)

    def get_value(self, key: str) -> str:
        if key not in self._env:
            raise KeyError(f"Key '{key}' not found in environment")
        return self._env[key]

    def load_env_file(self, fn: str, overwrite=False):
        if not os.path.isfile(fn):
            raise ConfigurationError(f"Could not find environment file {fn}")
        self.add_values(dotenv_values(fn), overwrite=overwrite)

    @classmethod
    def from_os_environ(cls) -> Self:
        env = cls()
        env.add_values(os.environ)
        return env
