"""Input/output: session configuration files."""

from springsim.io.serializers import load_config, load_session_config, save_config, save_session_config

__all__ = ["save_config", "load_config", "save_session_config", "load_session_config"]
