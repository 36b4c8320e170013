"""
Style Interface and Shared Helpers.

A style is one rewriting rule applied during a depth-first walk of the tree.
For every visited node the engine calls ``style.run(zipper, ctx)``, and the
style answers with a traversal command, the (possibly edited) zipper and the
context.

The helpers here are shared by styles that edit statement sequences: making
sure a statement lives inside a ``Block``, climbing to the nearest statement
that can take siblings, and repairing line numbers after nodes were moved.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from directive_styler.core.context import StyleContext
from directive_styler.core.nodes import Block, Call, Node
from directive_styler.core.traversal import set_line, shift_line
from directive_styler.core.zipper import Command, Zipper

# Anchor used when the nodes following a directive block carry no line.
DEFAULT_MAX_LINE = 999_999

# Gap left below the anchor so single-line comments above it are not captured.
LINE_GAP = 2


class Style(ABC):
  """
  Abstract Base Class for tree styles.
  """

  @property
  def name(self) -> str:
    return self.__class__.__name__

  @abstractmethod
  def run(self, zipper: Zipper, ctx: StyleContext) -> Tuple[Command, Zipper, StyleContext]:
    """
    Visits the focused node.

    Args:
        zipper: Cursor focused on the visited node.
        ctx: Per-run state.

    Returns:
        Tuple[Command, Zipper, StyleContext]: What the walk does next, from
        which position, with which context.
    """


def ensure_block_parent(zipper: Zipper) -> Optional[Zipper]:
  """
  Makes sure the focused node is a statement of a ``Block``.

  * A node already inside a Block is returned as is.
  * The root node is wrapped in a new Block.
  * The single-expression ``do`` body of a call is wrapped in a Block.

  Any other position (a call argument, an operand, ...) is not a statement,
  and None is returned.

  Args:
      zipper: Cursor focused on a candidate statement.

  Returns:
      Optional[Zipper]: Cursor focused on the same node, now inside a Block.
  """
  parent = zipper.parent_node()
  if isinstance(parent, Block):
    return zipper
  if parent is None:
    return Zipper.zip(Block((zipper.node,))).down()
  if isinstance(parent, Call) and parent.do is not None and not zipper.rights():
    return zipper.replace(Block((zipper.node,))).down()
  return None


def find_nearest_block(zipper: Zipper) -> Zipper:
  """
  Climbs to the nearest ancestor-or-self that is a statement of a Block (or
  the root). Siblings prepended there run before the original focus.
  """
  while True:
    if zipper.is_root or isinstance(zipper.parent_node(), Block):
      return zipper
    zipper = zipper.up()


def fix_line_numbers(nodes: Sequence[Node], anchor: Optional[Node] = None) -> List[Node]:
  """
  Makes the lines of ``nodes`` non-decreasing up to ``anchor``.

  Walking backwards from the anchor's line (or ``DEFAULT_MAX_LINE``), a node
  without a line, or with a line past the running maximum, is moved to just
  below that maximum; its whole subtree moves with it. Nodes sharing a line
  (the expansions of one multi-target directive) keep it.

  Args:
      nodes: The statements preceding ``anchor``, in order.
      anchor: The first statement after them, if any.

  Returns:
      List[Node]: The renumbered statements.
  """
  max_line = anchor.line if anchor is not None and anchor.line is not None else DEFAULT_MAX_LINE
  fixed: List[Node] = []
  for node in reversed(nodes):
    if node.line is None:
      node = set_line(node, max_line - LINE_GAP)
    elif node.line > max_line:
      node = shift_line(node, max_line - node.line - LINE_GAP)
    max_line = node.line
    fixed.append(node)
  fixed.reverse()
  return fixed
