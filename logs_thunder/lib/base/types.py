from typing import TypeVar

ConfigType = TypeVar("ConfigType")
"""A module's stack config dataclass"""

ExportsType = TypeVar("ExportsType")
"""A module's exports dataclass"""
