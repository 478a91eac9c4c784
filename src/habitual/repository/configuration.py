# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from habitual import configuration


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        self._config = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)

        if self._config is None:
            raise ValueError()

        # Back-fill keys added after the config file was written
        defaults = configuration.get_default_configuration()
        for key, default_value in defaults.items():
            if key not in self._config:
                self._config[key] = default_value  # type: ignore[literal-required]

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))

    def flush(self) -> bool:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False
            return True
        return False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
        debounce_seconds: Optional[float] = None,
        log_level: Optional[str] = None,
        show_header: Optional[bool] = None,
        clear_ids_on_view: Optional[bool] = None,
    ) -> None:
        self.is_dirty = True

        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None
        if debounce_seconds is not None:
            self.config["debounce_seconds"] = debounce_seconds
        if log_level is not None:
            self.config["log_level"] = log_level.upper()
        if show_header is not None:
            self.config["show_header"] = show_header
        if clear_ids_on_view is not None:
            self.config["clear_ids_on_view"] = clear_ids_on_view


CONFIGURATION_REPO = ConfigurationRepository()
