from dataclasses import is_dataclass, fields
from enum import Enum
from typing import Any

from pulumi import Output, get_stack


def serialize_exports(val: Any) -> Any:
    """Recursively convert dataclasses to dict and enums to their value, leaving ``Output``s alone"""
    if isinstance(val, (list, tuple)):
        return [serialize_exports(v) for v in val]
    elif isinstance(val, dict):
        return {k: serialize_exports(v) for k, v in val.items()}
    elif is_dataclass(val) and not isinstance(val, type):
        return {f.name: serialize_exports(getattr(val, f.name)) for f in fields(val)}
    elif isinstance(val, Enum):
        return val.value
    elif isinstance(val, Output):
        return val
    elif isinstance(val, type):
        raise TypeError(f"Unexpected value '{val}' of type '{type(val)}'")
    else:
        return val


def outputs_from_exports(exports: object) -> dict:
    """Generate a serializable output from a module exports object

    Recursively converts dataclasses to dict and enums to their value.

    :param exports: A module exports object, usually a dataclass instance
    :return: The output for the module, keyed by stack name
    """
    return {
        get_stack(): serialize_exports(exports),
    }
