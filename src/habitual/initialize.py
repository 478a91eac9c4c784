# SPDX-License-Identifier: MIT

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from habitual import configuration
from habitual.log import configure_logging
from habitual.model.task_meta import TaskMetas
from habitual.repository.configuration import CONFIGURATION_REPO
from habitual.template.id_map import get_id_map_template
from habitual.template.task_meta import get_default_task_metas
from habitual.view import state as view_state


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)

    __ensure_config_files()
    ensure_data_files()

    config = CONFIGURATION_REPO.get_config()
    configure_logging(config["log_level"])
    view_state.set_show_header(config["show_header"])


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        config = configuration.get_default_configuration()
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))


def ensure_data_files() -> None:
    # Single-file data stores
    if not configuration.DATA_TASK_METAS_PATH.is_file():
        task_metas: TaskMetas = {"task_metas": get_default_task_metas()}
        configuration.DATA_TASK_METAS_PATH.write_text(
            dump(task_metas, Dumper=Dumper, sort_keys=False)
        )
    if not configuration.DATA_ID_MAP_PATH.is_file():
        configuration.DATA_ID_MAP_PATH.write_text(
            dump(get_id_map_template(), Dumper=Dumper)
        )

    # Directory-based entity stores (one file per entity)
    configuration.DATA_TASKS_DIR.mkdir(parents=True, exist_ok=True)
    configuration.DATA_TRACKINGS_DIR.mkdir(parents=True, exist_ok=True)
