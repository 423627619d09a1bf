import logging
import sys
from collections import UserDict
from pathlib import Path

import hiyapyco

logger = logging.getLogger(__name__)


class ThunderConfigException(Exception):
    def __init__(self, key):
        super().__init__(f"Missing required configuration variable '{key}'")


class HierarchicalConfig(UserDict):
    """
    HierarchicalConfig is a UserDict that automatically loads configuration from a tiered set of config files.

    This class will load `Thunder.common.yaml` from the directory of the entrypoint (the sysenv's `thunder.py`), and
    will walk the filesystem upwards a configurable number of times to find other `Thunder.common.yaml` files.

    The discovered files will be merged using a YAML object merger (HiYaPyCo) that supports Jinja2 syntax. Files
    closer to the entrypoint win.

    Example usage:
        from logs_thunder.lib.config import thunder_env

        thunder_env.get("datadog_site", "datadoghq.com")
        thunder_env.require("namespace")

    """

    def __init__(self, limit=5, filename="Thunder.common.yaml"):
        """
        Create a HierarchicalConfig UserDict

        :param limit: Max parent directories to walk
        :param filename: Filename to find and merge
        """
        super().__init__()
        self.filename = filename
        configs = list(reversed(self._discover_configs(limit)))
        logger.debug("Found configs in %s", configs)

        if configs:
            # expose the data from the loader as our UserDict backing store
            self.data = hiyapyco.load([str(path) for path in configs], method=hiyapyco.METHOD_MERGE)

    def require(self, key: str) -> any:
        """
        Require a key from the configuration and return it. If not found, throw a `ThunderConfigException`

        :param key: Key string to require from the configuration
        :return: Object
        """
        if v := self.get(key):
            return v
        else:
            raise ThunderConfigException(key)

    def _entrypoint(self) -> Path:
        main_module = sys.modules["__main__"]

        if not hasattr(main_module, "__file__"):
            # REPLs and `python -c` have no entrypoint file, start from the working directory instead
            logger.debug("No __file__ for __main__, using the working directory")
            return Path.cwd() / "__main__"

        return Path(main_module.__file__).absolute()

    def _discover_configs(self, limit) -> list[Path]:
        """
        Find the path of the __main__ module that called this class, and walk upwards to find other files

        :param limit: Max parent directories to walk
        :return: Paths of the discovered files, closest first
        """
        config_paths = []

        entrypoint = self._entrypoint()
        logger.debug("Entrypoint: %s", entrypoint)

        # walk up the directory tree and find any files matching the name
        for path in list(entrypoint.parents)[:limit]:
            logger.debug("Looking in [%s] for [%s]", path, self.filename)
            maybe_config = path / self.filename
            if maybe_config.exists():
                logger.debug("Detected config [%s]", maybe_config)
                config_paths.append(maybe_config)

            # stop at the project root so configs above the repository are never merged in
            if (path / ".git").is_dir():
                logger.debug("Found project root, breaking")
                break

        return config_paths


# Create our singleton object to avoid loading and merging configuration multiple times on import
thunder_env = HierarchicalConfig()
