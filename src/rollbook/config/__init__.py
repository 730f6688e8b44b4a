"""Config loading and schema."""

from .loader import ConfigLoadError, config_from_env, load_config, resolve_config
from .schema import RepositoryConfig

__all__ = ["ConfigLoadError", "RepositoryConfig", "config_from_env", "load_config", "resolve_config"]
