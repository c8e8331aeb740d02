"""
Map reconciliation.

Converts between positional axes and key-indexed maps:

- ``axis_to_map`` pairs a key axis with a data axis position by position.
  Data axes are ragged (trailing empty cells are omitted by the API), so
  positions past the end of the data axis are wrapped as missing.
- ``reconcile`` projects caller maps onto the current key axis, producing the
  dense data axes to write and, with ``append_missing``, the keys the key axis
  must be extended with first.

With ``overwrite`` disabled, keys absent from a map produce ``None`` so that
the write leaves those cells untouched instead of blanking them.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, TypeVar

from keygrid.exceptions import InvalidArgumentError
from keygrid.spreadsheet.model import MapWriteOptions
from keygrid.utils.coerce import is_nested, to_key_string
from keygrid.values.keys import extract_sublist

V = TypeVar("V")


@dataclass
class Reconciliation:
    """Result of projecting maps onto a key axis.

    Attributes:
        axes: One data axis per input map, all of the same length
        new_keys: Keys to append to the key axis, in order of first appearance
        key_offset: Position along the key axis where new_keys start
    """
    axes: List[List[Any]]
    new_keys: List[str] = field(default_factory=list)
    key_offset: int = 1

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to write."""
        return not any(self.axes)


def axis_to_map(
    keys: List[str],
    values: List[str],
    wrap: Callable[[int, Optional[str]], V]
) -> Dict[str, V]:
    """Pair a key axis with a data axis.

    Args:
        keys: Key axis values
        values: Data axis values (may be shorter than keys)
        wrap: Called with (position, value) for every key; value is None for
            positions past the end of the data axis

    Returns:
        Map from key to wrapped value; for duplicate keys the last one wins
    """
    length = len(values)
    result: Dict[str, V] = {}
    for position, key in enumerate(keys):
        result[key] = wrap(position, values[position] if position < length else None)
    return result


def normalize_maps(maps: Iterable[Mapping[Any, Any]]) -> List[Dict[str, Any]]:
    """Validate input maps and coerce their keys to strings.

    Raises:
        InvalidArgumentError: If there are no maps, a map is empty, a key is
            blank or a value is a list
    """
    maps = list(maps) if maps is not None else []
    if not maps:
        raise InvalidArgumentError(f"invalid maps ({maps!r})")

    normalized = []
    for mapping in maps:
        if not mapping:
            raise InvalidArgumentError(f"invalid map ({mapping!r})")
        if is_nested(list(mapping.values())):
            raise InvalidArgumentError("nested values cannot be written to a single cell")
        normalized.append({to_key_string(key): value for key, value in mapping.items()})
    return normalized


def missing_keys(maps: List[Dict[str, Any]], all_keys: List[str]) -> List[str]:
    """Union of map keys absent from the key axis, in order of first appearance."""
    known = set(all_keys)
    result = []
    for mapping in maps:
        for key in mapping:
            if key not in known:
                known.add(key)
                result.append(key)
    return result


def reconcile(
    maps: List[Dict[str, Any]],
    all_keys: List[str],
    start: int,
    options: MapWriteOptions
) -> Reconciliation:
    """Project maps onto a key axis.

    Args:
        maps: Normalized input maps (see ``normalize_maps``)
        all_keys: The whole key axis as read from the sheet
        start: 1-based position along the key axis where the data axes start
        options: Map write policies

    Returns:
        Reconciliation holding one data axis per map. Every axis has one entry
        per key in ``all_keys[start - 1:]`` followed by one entry per new key.
    """
    keys = extract_sublist(all_keys, start - 1)
    new_keys = missing_keys(maps, all_keys) if options.append_missing else []
    filler = "" if options.overwrite else None

    axes = []
    for mapping in maps:
        axis = []
        for key in keys + new_keys:
            value = mapping.get(key)
            axis.append(filler if value is None else value)
        axes.append(axis)

    return Reconciliation(axes=axes, new_keys=new_keys, key_offset=start + len(keys))
