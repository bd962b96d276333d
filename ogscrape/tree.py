"""
MetaTree construction.

A MetaTree is a plain dict keyed by property path segments. Each value is
a string, a nested MetaTree, or a list of strings and MetaTrees holding
repeated properties. Insertion follows these rules:

- Intermediate segments: a list redirects into its last element, a string
  is promoted to ``{"": string}``, and a missing key becomes an empty dict.
- Final segment: a missing key takes the value, a list gets the value
  appended, anything else becomes ``[old, new]``.

Example:
    >>> tree = {}
    >>> insert(tree, "image:url", "a.png")
    {'image': {'url': 'a.png'}}
    >>> insert(tree, "image:url", "b.png")
    {'image': {'url': ['a.png', 'b.png']}}
"""
from typing import Any, Dict, List, Optional, Sequence, Union

MetaValue = Union[str, Dict[str, Any], List[Any]]
MetaTree = Dict[str, MetaValue]

PATH_SEPARATOR = ":"


def split_path(path: str) -> List[str]:
    """Split a colon-delimited property path into its segments."""
    return path.split(PATH_SEPARATOR)


def insert(tree: MetaTree, path: Union[str, Sequence[str]], value: str) -> MetaTree:
    """
    Insert ``value`` at ``path`` and return the (same) tree.

    Args:
        tree: Tree to insert into, modified in place
        path: Colon-delimited path or a sequence of segments
        value: Leaf value

    Returns:
        The tree that was passed in
    """
    segments = split_path(path) if isinstance(path, str) else list(path)
    if not segments:
        raise ValueError("Property path must have at least one segment")

    key, rest = segments[0], segments[1:]
    tree[key] = _place(tree.get(key), rest, value)
    return tree


def _place(slot: Optional[MetaValue], rest: List[str], value: str) -> MetaValue:
    """Return the new content of a slot after inserting below it."""
    if not rest:
        if slot is None:
            return value
        if isinstance(slot, list):
            slot.append(value)
            return slot
        return [slot, value]

    if isinstance(slot, list):
        # Repeated property: later attributes belong to the latest sibling
        slot[-1] = _branch(slot[-1], rest, value)
        return slot
    return _branch(slot, rest, value)


def _branch(slot: Optional[MetaValue], rest: List[str], value: str) -> MetaTree:
    """Turn a slot into a subtree and continue inserting into it."""
    if slot is None:
        node: MetaTree = {}
    elif isinstance(slot, str):
        node = {"": slot}
    else:
        node = slot
    return insert(node, rest, value)
