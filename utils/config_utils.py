"""
This module contains utility functions for loading configuration files.
"""

import os
from functools import lru_cache
from typing import Any

import yaml

from utils.earth_utils import Ellipsoid

MAIN_CONFIG_PATH = os.path.abspath(os.path.join(__file__, "../../config.yaml"))
USER_CONFIG_PATH = os.path.abspath(os.path.join(__file__, "../../user_config.yaml"))


def load_config(config_path: str = MAIN_CONFIG_PATH) -> Any:
    """
    Loads a YAML configuration file.

    If no path is given and a user_config.yaml exists next to config.yaml, the user file is loaded instead.

    :param config_path: The path to the configuration file. If not provided, the main configuration file is loaded.
    :return: The contents of the configuration file.
    """
    if config_path == MAIN_CONFIG_PATH and os.path.exists(USER_CONFIG_PATH):
        config_path = USER_CONFIG_PATH
    with open(config_path, "r", encoding="utf-8") as file:
        return yaml.safe_load(file)


def get_ellipsoid_config(config_path: str = MAIN_CONFIG_PATH) -> Ellipsoid:
    """
    Builds the reference ellipsoid described in the "ellipsoid" section of the configuration.

    :param config_path: The path to the configuration file.
    :return: The configured Ellipsoid.
    """
    ellipsoid = load_config(config_path)["ellipsoid"]
    return Ellipsoid(
        name=str(ellipsoid.get("name", "custom")),
        semi_major_axis=float(ellipsoid["semi_major_axis"]),
        inverse_flattening=float(ellipsoid["inverse_flattening"]),
    )


@lru_cache(maxsize=None)
def get_offset_tolerance(config_path: str = MAIN_CONFIG_PATH) -> float:
    """
    Returns how far (in meters) a square-relative offset may fall outside [0, 100000) before it is treated as an error.
    """
    return float(load_config(config_path).get("mgrs", {}).get("offset_tolerance", 1e-6))
