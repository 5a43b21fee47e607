"""
Parameter Extraction

Typed accessors that pull values out of a tool call's argument bag.

Every value in the bag is first classified into a closed set of kinds
(string, number, boolean, array, absent, other). Each accessor then
matches on the kind it accepts and rejects everything else with a
TypeMismatchError.

Required accessors treat a present-but-empty value ("" or 0) the same as
an absent one and raise MissingParameterError. Optional accessors return
the zero value of their type when the key is absent.
"""

import math
from enum import Enum
from typing import Any, Dict, List, Tuple

from .base import ArgumentBag, MissingParameterError, TypeMismatchError


class ValueKind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    ABSENT = "absent"
    OTHER = "object"


def classify(value: Any) -> ValueKind:
    """Map a decoded JSON value onto its ValueKind."""
    if value is None:
        return ValueKind.ABSENT
    # bool subclasses int, so it has to be checked first
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    return ValueKind.OTHER


def _lookup(bag: ArgumentBag, name: str) -> Tuple[ValueKind, Any]:
    if name not in bag:
        return ValueKind.ABSENT, None
    value = bag[name]
    return classify(value), value


def _truncate(name: str, value: Any) -> int:
    # JSON integers decode to exact ints that may not fit a float
    try:
        finite = math.isfinite(value)
    except OverflowError:
        raise TypeMismatchError(name, "number", "out-of-range number")
    if not finite:
        raise TypeMismatchError(name, "number", repr(value))
    # int() truncates toward zero
    return int(value)


# ----------------------------------------------------------------------
# Required
# ----------------------------------------------------------------------

def required_str(bag: ArgumentBag, name: str) -> str:
    kind, value = _lookup(bag, name)
    if kind is ValueKind.ABSENT:
        raise MissingParameterError(name)
    if kind is not ValueKind.STRING:
        raise TypeMismatchError(name, "string", kind.value)
    if value == "":
        raise MissingParameterError(name)
    return value


def required_int(bag: ArgumentBag, name: str) -> int:
    """
    Read a required number and truncate it to an int.

    The zero check runs on the number as sent, so 0 is rejected while
    0.5 is accepted and truncates to 0.
    """
    kind, value = _lookup(bag, name)
    if kind is ValueKind.ABSENT:
        raise MissingParameterError(name)
    if kind is not ValueKind.NUMBER:
        raise TypeMismatchError(name, "number", kind.value)
    if value == 0:
        raise MissingParameterError(name)
    return _truncate(name, value)


def required_bool(bag: ArgumentBag, name: str) -> bool:
    """
    Read a required boolean.

    Unlike the other required accessors, an explicit False is accepted:
    applying the zero-value rule here would make False impossible to send.
    """
    kind, value = _lookup(bag, name)
    if kind is ValueKind.ABSENT:
        raise MissingParameterError(name)
    if kind is not ValueKind.BOOLEAN:
        raise TypeMismatchError(name, "boolean", kind.value)
    return value


# ----------------------------------------------------------------------
# Optional
# ----------------------------------------------------------------------

def optional_str(bag: ArgumentBag, name: str) -> str:
    kind, value = _lookup(bag, name)
    if kind is ValueKind.ABSENT:
        return ""
    if kind is not ValueKind.STRING:
        raise TypeMismatchError(name, "string", kind.value)
    return value


def optional_int(bag: ArgumentBag, name: str) -> int:
    kind, value = _lookup(bag, name)
    if kind is ValueKind.ABSENT:
        return 0
    if kind is not ValueKind.NUMBER:
        raise TypeMismatchError(name, "number", kind.value)
    return _truncate(name, value)


def optional_int_with_default(bag: ArgumentBag, name: str, default: int) -> int:
    """
    Like optional_int, but 0 resolves to ``default``.

    An explicit 0 from the caller cannot be told apart from an absent
    key and is replaced by the default as well.
    """
    value = optional_int(bag, name)
    if value == 0:
        return default
    return value


def optional_bool(bag: ArgumentBag, name: str) -> bool:
    kind, value = _lookup(bag, name)
    if kind is ValueKind.ABSENT:
        return False
    if kind is not ValueKind.BOOLEAN:
        raise TypeMismatchError(name, "boolean", kind.value)
    return value


def optional_string_array(bag: ArgumentBag, name: str) -> List[str]:
    """
    Read an optional array of strings.

    Every element must be a string; the first one that is not fails the
    whole call and nothing is returned.
    """
    kind, value = _lookup(bag, name)
    if kind is ValueKind.ABSENT:
        return []
    if kind is not ValueKind.ARRAY:
        raise TypeMismatchError(name, "array of strings", kind.value)

    items: List[str] = []
    for index, item in enumerate(value):
        item_kind = classify(item)
        if item_kind is not ValueKind.STRING:
            raise TypeMismatchError(f"{name}[{index}]", "string", item_kind.value)
        items.append(item)
    return items


def optional_object_array(bag: ArgumentBag, name: str) -> List[Dict[str, Any]]:
    """Read an optional array of JSON objects, all or nothing."""
    kind, value = _lookup(bag, name)
    if kind is ValueKind.ABSENT:
        return []
    if kind is not ValueKind.ARRAY:
        raise TypeMismatchError(name, "array of objects", kind.value)

    items: List[Dict[str, Any]] = []
    for index, item in enumerate(value):
        if not isinstance(item, dict):
            raise TypeMismatchError(f"{name}[{index}]", "object", classify(item).value)
        items.append(item)
    return items


def required_object_array(bag: ArgumentBag, name: str) -> List[Dict[str, Any]]:
    items = optional_object_array(bag, name)
    if not items:
        raise MissingParameterError(name)
    return items
