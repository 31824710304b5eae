from __future__ import annotations

import logging
from decimal import Decimal
from typing import TypeAlias

from json_size.config import DEFAULT_CONFIG, LayoutConfig

logger = logging.getLogger(__name__)

# Decimal is what json.loads(parse_float=Decimal) hands back for numbers.
JsonScalar: TypeAlias = str | int | float | Decimal | bool | None
JsonValue: TypeAlias = JsonScalar | list["JsonValue"] | tuple["JsonValue", ...] | dict[str, "JsonValue"]

_NUMBER_TYPES = (int, float, Decimal)


class JsonTypeError(TypeError):
    """Raised when the tree holds something json.loads could never produce."""


class JsonCycleError(ValueError):
    """Raised when a container is reachable from itself."""


class _Leave:
    """Stack marker: the container with this id has been fully expanded."""

    __slots__ = ("key",)

    def __init__(self, key: int) -> None:
        self.key = key


def string_capacity(s: str) -> int:
    """Allocated bytes of a string buffer: its UTF-8 length (Python strs are exact-sized)."""

    return len(s.encode("utf-8", "surrogatepass"))


def sizeof_val(value: JsonValue, config: LayoutConfig = DEFAULT_CONFIG) -> int:
    """Estimate the in-memory size of a JSON value tree, in bytes.

    - Every node (root, containers and leaves) costs one value envelope.
    - null / bool / number: envelope only. Big ints and Decimals are not
      charged extra; this undercounts arbitrary-precision numbers and is a
      known approximation.
    - string: string header + buffer capacity.
    - array: sum of its elements.
    - object: per pair, key header + key capacity + value + map entry overhead.

    Walks the tree with an explicit stack, so depth is not limited by the
    recursion limit. Containers shared between branches are counted once per
    occurrence; a container that contains itself raises JsonCycleError.
    The input is never modified.
    """

    envelope = config.value_envelope
    str_overhead = config.string_overhead
    entry_overhead = config.map_entry_overhead

    total = 0
    # ids of the containers between the root and the node being visited
    path: set[int] = set()
    stack: list = [value]
    while stack:
        v = stack.pop()
        if isinstance(v, _Leave):
            path.discard(v.key)
            continue

        total += envelope

        # bool is an int subclass; both land here
        if v is None or isinstance(v, _NUMBER_TYPES):
            continue
        if isinstance(v, str):
            total += str_overhead + string_capacity(v)
            continue
        if not isinstance(v, (list, tuple, dict)):
            logger.debug("rejecting value of type %s", type(v).__name__)
            raise JsonTypeError(f"Object of type {type(v).__name__} is not a JSON value")

        key = id(v)
        if key in path:
            logger.debug("circular reference through %s", type(v).__name__)
            raise JsonCycleError("Circular reference detected")
        path.add(key)
        stack.append(_Leave(key))

        if isinstance(v, dict):
            for k, item in v.items():
                if not isinstance(k, str):
                    logger.debug("rejecting object key of type %s", type(k).__name__)
                    raise JsonTypeError(f"object keys must be str, not {type(k).__name__}")
                total += str_overhead + string_capacity(k) + entry_overhead
                stack.append(item)
        else:
            stack.extend(v)

    return total
