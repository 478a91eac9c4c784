# SPDX-License-Identifier: MIT

import atexit

from habitual.repository.configuration import CONFIGURATION_REPO
from habitual.repository.id_map import ID_MAP_REPO
from habitual.repository.task import TASK_REPO
from habitual.repository.tracking import TRACKING_REPO


def flush() -> None:
    CONFIGURATION_REPO.flush()
    ID_MAP_REPO.flush()
    TASK_REPO.flush()
    TRACKING_REPO.flush()


def register_cleanup() -> None:
    atexit.register(flush)
