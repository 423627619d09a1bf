import json
from enum import Enum
from typing import Type, Any

from dacite import from_dict, Config, DaciteError
from pulumi import log, runtime

from logs_thunder.lib.base import ConfigType


class StackConfigException(Exception):
    def __init__(self, stack: str, reason: Any):
        super().__init__(f"Invalid configuration for stack '{stack}': {reason}")


def _parse_args_value(value: Any) -> Any:
    """Parse and return json values if valid json, else return original value

    Pulumi hands structured config (``--path`` or ``secure`` objects) over as json strings.

    :param value: A potential json string
    :return: Parsed json object or raw arg
    """
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except json.decoder.JSONDecodeError:
        return value


def get_raw_stack_config(stack: str) -> dict:
    """Pull stack config from Pulumi internals, clean it and return in dict form

    This method may break when upgrading the ``pulumi`` python dependency.

    :param stack: Name of the stack
    :return: dict
    """
    stack_prefix = stack + ":"

    return {
        k.removeprefix(stack_prefix): _parse_args_value(v)
        for k, v in runtime.config.CONFIG.items()
        if k.startswith(stack_prefix)
    }


def parse_stack_config(stack: str, raw_config: dict, config_cls: Type[ConfigType]) -> ConfigType:
    """Map a raw config dict onto the module's config dataclass

    Uses `dacite <https://github.com/konradhalas/dacite>`_ in strict mode, unknown keys are errors.

    :param stack: Name of the stack, for error messages
    :param raw_config: Config keys and their parsed values
    :param config_cls: The dataclass for the config
    :return: The stack config expressed in the module's config dataclass
    """
    try:
        return from_dict(
            data_class=config_cls,
            data=raw_config,
            config=Config(
                cast=[Enum],
                strict=True,
            ),
        )
    except DaciteError as e:
        raise StackConfigException(stack, e) from e


def get_stack_config(stack: str, config_cls: Type[ConfigType]) -> ConfigType:
    """Get a stack config in dataclass form

    :param stack: Name of the stack
    :param config_cls: The dataclass for the config
    :return: The stack config expressed in the module's config dataclass
    """
    raw_config = get_raw_stack_config(stack)

    # don't log raw values, they may hold secrets
    log.debug(f"config keys for stack `{stack}` are {sorted(raw_config)}")

    return parse_stack_config(stack, raw_config, config_cls)
