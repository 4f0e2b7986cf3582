import copy
import os
import tomllib
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from loguru import logger

from catenary_cvx.errors import InvalidInputError

DEFAULT_CONFIG: dict = {
    "solver": {
        "name": None,
        "verbose": False,
        "accept_inaccurate": False,
        "options": {},
    },
    "model": {
        "nodes": 51,
        "length": 2.0,
        "begin": [0.0, 0.0],
        "end": [1.0, 0.0],
        "sparse_operator": False,
    },
    "plot": {
        "height": 600,
        "num_points": 200,
    },
}

TRUTHY = {"1", "true", "yes", "on"}


class ConfigLoader:
    """Loads configuration from a TOML file, layered over defaults and environment overrides"""

    def __init__(self, config_path: Path = Path("config.toml"), use_env: bool = True):
        self.config_path = Path(config_path)
        self.config = self._load_config(self.config_path)
        if use_env:
            load_dotenv(find_dotenv(usecwd=True))
            self._apply_env_overrides()
        self._validate_config()

    def _load_config(self, config_path: Path) -> dict:
        """Load config from TOML merged onto the defaults"""
        config = copy.deepcopy(DEFAULT_CONFIG)
        if not config_path.exists():
            logger.debug(f"No config file at {config_path}, using defaults")
            return config

        with open(config_path, "rb") as f:
            loaded = tomllib.load(f)
        logger.info(f"Loaded config from {config_path}")

        for section, values in loaded.items():
            if isinstance(values, dict):
                config.setdefault(section, {}).update(values)
            else:
                config[section] = values
        return config

    def _apply_env_overrides(self) -> None:
        """CATENARY_SOLVER and CATENARY_SOLVER_VERBOSE win over the file"""
        solver = os.getenv("CATENARY_SOLVER")
        if solver:
            logger.debug(f"Solver overridden from environment: {solver}")
            self.config["solver"]["name"] = solver

        verbose = os.getenv("CATENARY_SOLVER_VERBOSE")
        if verbose is not None:
            self.config["solver"]["verbose"] = verbose.strip().lower() in TRUTHY

    def _validate_config(self) -> None:
        """Reject model defaults that could never describe a hanging chain"""
        nodes = self.get("model", "nodes")
        if not isinstance(nodes, int) or nodes < 2:
            raise InvalidInputError(f"model.nodes must be an integer >= 2, got {nodes!r}")

        length = self.get("model", "length")
        if not isinstance(length, (int, float)) or length <= 0:
            raise InvalidInputError(f"model.length must be positive, got {length!r}")

        for key in ("begin", "end"):
            point = self.get("model", key)
            if len(point) != 2:
                raise InvalidInputError(f"model.{key} must be an [x, y] pair, got {point!r}")

    def get(self, section: str, key: str = None, default: Optional[any] = None) -> any:
        """Get config value with fallback."""
        section_data = self.config.get(section, {})
        if key is None:
            return section_data
        value = section_data.get(key, default)
        return default if value is None else value
