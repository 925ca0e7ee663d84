"""Runner configuration: schema and loading."""

from functester.config.loader import get_config_path, load_config
from functester.config.models import RunnerConfig

__all__ = ["RunnerConfig", "get_config_path", "load_config"]
