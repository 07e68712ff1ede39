"""Generator configuration.

Defaults match the Twitter client runtime; a YAML file can override names
and extend the return-type tables.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError

from api_client_gen.errors import ConfigError
from api_client_gen.model.returns import DEFAULT_TABLES, ReturnTables

DEFAULT_CLIENT_NAME = "TwitterClient"
DEFAULT_RESULT_TYPE = "TwitterResult"
DEFAULT_EXECUTOR = "execute_core"
MANUAL_METHOD = "Impl"


class GeneratorConfig(BaseModel):
    client_name: str = DEFAULT_CLIENT_NAME
    result_type: str = DEFAULT_RESULT_TYPE
    executor: str = DEFAULT_EXECUTOR
    manual_method: str = MANUAL_METHOD
    unsupported_transports: list[str] = ["Stream"]
    extra_aliases: dict[str, str] = {}
    extra_unsupported: list[str] = []
    exclude: list[str] = []

    def tables(self) -> ReturnTables:
        """Return-type tables with this configuration's extra entries merged in."""
        if not self.extra_aliases and not self.extra_unsupported:
            return DEFAULT_TABLES
        return DEFAULT_TABLES.extended(self.extra_aliases, self.extra_unsupported)


def load_config(path: Path | None) -> GeneratorConfig:
    """Load a configuration file, or the defaults when no path is given."""
    if path is None:
        return GeneratorConfig()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"{path}: {e}") from e

    if data is None:
        return GeneratorConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")

    try:
        return GeneratorConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"{path}: {e}") from e
