"""Save and load configurations as JSON."""

import json
from pathlib import Path
from typing import Any, Dict, Union

import numpy as np

from springsim.core.config import SessionConfig


def _convert(d: Any) -> Any:
    """Make numpy values and tuples JSON friendly."""
    if isinstance(d, np.ndarray):
        return d.tolist()
    if isinstance(d, dict):
        return {k: _convert(v) for k, v in d.items()}
    if isinstance(d, (list, tuple)):
        return [_convert(x) for x in d]
    if isinstance(d, (np.floating, np.integer)):
        return float(d) if isinstance(d, np.floating) else int(d)
    return d


def save_config(config: Dict[str, Any], path: Union[str, Path]) -> None:
    """
    Save a configuration (dict) to JSON.
    Numpy arrays are converted to lists.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(_convert(config), f, indent=2, ensure_ascii=False)


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a configuration from JSON."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def save_session_config(config: SessionConfig, path: Union[str, Path]) -> None:
    save_config(config.to_dict(), path)


def load_session_config(path: Union[str, Path]) -> SessionConfig:
    """Read a SessionConfig; missing keys keep their defaults."""
    return SessionConfig.from_dict(load_config(path))
