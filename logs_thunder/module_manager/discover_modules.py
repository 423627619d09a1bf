from os import walk
from pathlib import Path

from pulumi import log

from .lazy_module import LazyModule

_package_name = "logs_thunder"
_module_container_name = "modules"


def _get_package_path() -> Path:
    """Locate the ``logs_thunder`` package directory this file lives in"""
    for path in Path(__file__).absolute().parents:
        if path.name == _package_name:
            return path

    raise Exception(f"module population failed: package is named something other than `{_package_name}`")


def _get_dirs(path: Path) -> list[str]:
    """Get all directories in ``path`` that don't start with underscore

    :param path: Path to start from
    :return: List of directories in ``path``
    """
    _, dirs, _ = next(walk(path))
    return [d for d in dirs if not d.startswith("_")]


def discover_modules() -> dict[str, dict[str, LazyModule]]:
    """Find all modules

    Assumes that the path to a module is ``logs_thunder/modules/{provider}/{module}``.

    The module folder name is converted from snake to kebab case for the nested dictionary key, so it matches the
    stack name.

    Example::

        # logs_thunder
        # └── modules
        #     └── datadog
        #         └── logs_archives

        {
            "datadog": {
                "logs-archives": LazyModule(provider='datadog', name='logs_archives'),
            },
        }

    :return: A mapping of providers to mappings of module names to lazy modules
    """
    package_path = _get_package_path()

    log.debug(f"identified package path for `{_package_name}` as `{str(package_path)}`")

    providers_path = package_path / _module_container_name

    return {
        provider: {
            module_name.replace("_", "-"): LazyModule(provider, module_name)
            for module_name in _get_dirs(providers_path / provider)
        }
        for provider in _get_dirs(providers_path)
    }
