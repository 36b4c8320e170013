"""
Tree Cursor (Zipper).

A ``Zipper`` is an immutable focus on one node of a tree, plus the path back
to the root (left siblings, parent, right siblings at every level). Moving the
focus and editing around it are O(1) local operations; the parent is only
rebuilt when moving ``up``. Every operation returns a new ``Zipper``.

Navigating past an edge of the tree returns ``None``.

The ``traverse_while`` driver walks the tree depth first and lets a callback
decide, per node, whether to descend (``Command.CONT``), continue with the
next sibling (``Command.SKIP``) or stop (``Command.HALT``).
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence, Tuple

from directive_styler.core.nodes import Block, Node


class Command(str, Enum):
  CONT = "cont"
  SKIP = "skip"
  HALT = "halt"


@dataclass(frozen=True)
class _Path:
  left: Tuple[Node, ...]
  parent: Node
  right: Tuple[Node, ...]
  parent_path: Optional["_Path"]


class Zipper:
  """
  Cursor over an immutable syntax tree.

  Attributes:
      node (Node): The focused node.
  """

  __slots__ = ("node", "_path")

  def __init__(self, node: Node, path: Optional[_Path] = None) -> None:
    self.node = node
    self._path = path

  def __repr__(self) -> str:
    return f"Zipper({type(self.node).__name__}, depth={self.depth})"

  @classmethod
  def zip(cls, node: Node) -> "Zipper":
    """Creates a zipper focused on the root of ``node``."""
    return cls(node)

  @property
  def depth(self) -> int:
    depth, path = 0, self._path
    while path is not None:
      depth, path = depth + 1, path.parent_path
    return depth

  @property
  def is_root(self) -> bool:
    return self._path is None

  # -- Navigation --

  def down(self) -> Optional["Zipper"]:
    """Focuses the first child."""
    children = self.node.children()
    if not children:
      return None
    return Zipper(children[0], _Path((), self.node, tuple(children[1:]), self._path))

  def up(self) -> Optional["Zipper"]:
    """Focuses the parent, rebuilding it around the current focus."""
    path = self._path
    if path is None:
      return None
    parent = path.parent.with_children([*path.left, self.node, *path.right])
    return Zipper(parent, path.parent_path)

  def right(self) -> Optional["Zipper"]:
    path = self._path
    if path is None or not path.right:
      return None
    return Zipper(path.right[0], replace(path, left=path.left + (self.node,), right=path.right[1:]))

  def left(self) -> Optional["Zipper"]:
    path = self._path
    if path is None or not path.left:
      return None
    return Zipper(path.left[-1], replace(path, left=path.left[:-1], right=(self.node,) + path.right))

  def rightmost(self) -> "Zipper":
    path = self._path
    if path is None or not path.right:
      return self
    siblings = path.left + (self.node,) + path.right[:-1]
    return Zipper(path.right[-1], replace(path, left=siblings, right=()))

  def leftmost(self) -> "Zipper":
    path = self._path
    if path is None or not path.left:
      return self
    siblings = path.left[1:] + (self.node,) + path.right
    return Zipper(path.left[0], replace(path, left=(), right=siblings))

  def next(self) -> Optional["Zipper"]:
    """Next node in depth-first order."""
    return self.down() or self.skip()

  def skip(self) -> Optional["Zipper"]:
    """Next node in depth-first order that is not a descendant of the focus."""
    zipper: Optional[Zipper] = self
    while zipper is not None:
      sibling = zipper.right()
      if sibling is not None:
        return sibling
      zipper = zipper.up()
    return None

  def top(self) -> "Zipper":
    zipper = self
    while zipper._path is not None:
      zipper = zipper.up()
    return zipper

  def root(self) -> Node:
    """Rebuilds and returns the whole tree."""
    return self.top().node

  def children(self) -> List[Node]:
    return self.node.children()

  def lefts(self) -> Tuple[Node, ...]:
    return () if self._path is None else self._path.left

  def rights(self) -> Tuple[Node, ...]:
    return () if self._path is None else self._path.right

  def parent_node(self) -> Optional[Node]:
    """The (un-rebuilt) parent node, or None at the root."""
    return None if self._path is None else self._path.parent

  # -- Editing --

  def replace(self, node: Node) -> "Zipper":
    return Zipper(node, self._path)

  def replace_children(self, children: Sequence[Node]) -> "Zipper":
    return Zipper(self.node.with_children(children), self._path)

  def with_lefts(self, nodes: Sequence[Node]) -> "Zipper":
    """Replaces the left siblings of the focus."""
    if self._path is None:
      raise ValueError("The root node has no siblings")
    return Zipper(self.node, replace(self._path, left=tuple(nodes)))

  def insert_siblings(self, nodes: Sequence[Node]) -> "Zipper":
    """
    Inserts nodes immediately after the focus, keeping the focus.
    At the root, the root is first wrapped in a Block.
    """
    if not nodes:
      return self
    if self._path is None:
      return Zipper(Block((self.node, *nodes))).down()
    return Zipper(self.node, replace(self._path, right=tuple(nodes) + self._path.right))

  def prepend_siblings(self, nodes: Sequence[Node]) -> "Zipper":
    """
    Inserts nodes immediately before the focus, keeping the focus.
    At the root, the root is first wrapped in a Block.
    """
    if not nodes:
      return self
    if self._path is None:
      return Zipper(Block((*nodes, self.node))).down().rightmost()
    return Zipper(self.node, replace(self._path, left=self._path.left + tuple(nodes)))

  def remove(self) -> "Zipper":
    """
    Removes the focus. The new focus is the node preceding it in depth-first
    order (the deepest last descendant of the left sibling, or the parent).
    """
    path = self._path
    if path is None:
      raise ValueError("Cannot remove the root node")
    if path.left:
      zipper = Zipper(path.left[-1], replace(path, left=path.left[:-1]))
      while True:
        child = zipper.down()
        if child is None:
          return zipper
        zipper = child.rightmost()
    parent = path.parent.with_children(list(path.right))
    return Zipper(parent, path.parent_path)

  # -- Search --

  def find(self, predicate: Callable[[Node], bool]) -> Optional["Zipper"]:
    """Depth-first search within the focused subtree."""
    if predicate(self.node):
      return self
    child = self.down()
    while child is not None:
      found = child.find(predicate)
      if found is not None:
        return found
      child = child.right()
    return None

  def find_ancestor(self, predicate: Callable[[Node], bool]) -> Optional["Zipper"]:
    """Nearest proper ancestor satisfying ``predicate``."""
    zipper = self.up()
    while zipper is not None:
      if predicate(zipper.node):
        return zipper
      zipper = zipper.up()
    return None

  # -- Traversal --

  def traverse_while(
    self,
    fun: Callable[["Zipper", Any], Tuple[Command, "Zipper", Any]],
    acc: Any = None,
  ) -> Tuple[Node, Any]:
    """
    Walks the tree from the focus, applying ``fun`` to each visited node.

    Args:
        fun: ``fun(zipper, acc) -> (command, zipper, acc)``.
        acc: Initial accumulator.

    Returns:
        Tuple[Node, Any]: The rebuilt root and the final accumulator.
    """
    zipper = self
    while True:
      command, zipper, acc = fun(zipper, acc)
      if command == Command.HALT:
        return zipper.root(), acc
      following = zipper.next() if command == Command.CONT else zipper.skip()
      if following is None:
        return zipper.root(), acc
      zipper = following
