# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import NotRequired, Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "habitual"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_TASK_METAS_PATH: Path = DATA_PATH / "task_metas.yaml"
DATA_ID_MAP_PATH: Path = DATA_PATH / "id_map.yaml"
DATA_TASKS_DIR: Path = DATA_PATH / "tasks"
DATA_TRACKINGS_DIR: Path = DATA_PATH / "trackings"

DEFAULT_DEBOUNCE_SECONDS = 3.0


class Configuration(TypedDict):
    data_path: Optional[str]
    debounce_seconds: float
    log_level: str
    show_header: bool
    clear_ids_on_view: NotRequired[bool]


def get_default_configuration() -> Configuration:
    return {
        "data_path": None,
        "debounce_seconds": DEFAULT_DEBOUNCE_SECONDS,
        "log_level": "WARNING",
        "show_header": True,
        "clear_ids_on_view": False,
    }


def set_data_path(data_path: Path) -> None:
    global DATA_PATH, DATA_TASK_METAS_PATH, DATA_ID_MAP_PATH
    global DATA_TASKS_DIR, DATA_TRACKINGS_DIR

    DATA_PATH = data_path
    DATA_TASK_METAS_PATH = DATA_PATH / "task_metas.yaml"
    DATA_ID_MAP_PATH = DATA_PATH / "id_map.yaml"
    DATA_TASKS_DIR = DATA_PATH / "tasks"
    DATA_TRACKINGS_DIR = DATA_PATH / "trackings"


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories are read.
    """
    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return

    data_path_setting = config.get("data_path")
    if data_path_setting is not None:
        set_data_path(Path(data_path_setting))
