"""
``@derive`` Placement.

``@derive`` only applies to a struct defined after it; one written below its
``defstruct`` (or Ecto ``schema`` / ``embedded_schema``) is moved up to sit
directly before the nearest preceding struct definition.
"""

from typing import FrozenSet, Optional

from directive_styler.core.nodes import Attribute, Call
from directive_styler.core.style import ensure_block_parent
from directive_styler.core.traversal import set_line
from directive_styler.core.zipper import Zipper

STRUCT_DEFINITIONS: FrozenSet[str] = frozenset({"defstruct", "schema", "embedded_schema"})


def is_derive(node) -> bool:
  return isinstance(node, Attribute) and node.name == "derive" and node.value is not None


def place_derive(zipper: Zipper) -> Optional[Zipper]:
  """
  Moves the focused ``@derive`` above the nearest struct definition before it.

  Args:
      zipper: Cursor focused on a ``@derive`` attribute.

  Returns:
      Optional[Zipper]: The cursor after the move (focused on the node that
      preceded the ``@derive``), or None when nothing moved.
  """
  zipper = ensure_block_parent(zipper)
  if zipper is None:
    return None

  lefts = zipper.lefts()
  for index in range(len(lefts) - 1, -1, -1):
    sibling = lefts[index]
    if isinstance(sibling, Call) and sibling.name in STRUCT_DEFINITIONS:
      line = None if sibling.line is None else sibling.line - 1
      derive = set_line(zipper.node, line)
      moved = lefts[:index] + (derive,) + lefts[index:]
      return zipper.with_lefts(moved).remove()
  return None
