"""
Depth-First Tree Folds.

Accumulate-while-rewriting traversal helpers. ``fold`` threads an accumulator
through a pre-order walk and returns ``(new_node, new_acc)``; the callback may
replace a node before its children are visited, and the walk descends into the
replacement.

Subtrees that are structurally unchanged are returned as the same objects, so
identity comparisons keep working on untouched parts of the tree.
"""

from typing import Callable, Iterator, Optional, Tuple, TypeVar

from directive_styler.core.nodes import Node, opens_scope

A = TypeVar("A")

FoldFn = Callable[[Node, A], Tuple[Node, A]]


def fold(
  node: Node,
  acc: A,
  fun: FoldFn,
  descend: Optional[Callable[[Node], bool]] = None,
) -> Tuple[Node, A]:
  """
  Pre-order fold over a subtree.

  Args:
      node: The subtree root.
      acc: Initial accumulator.
      fun: ``fun(node, acc) -> (node, acc)`` applied before visiting children.
      descend: Optional predicate; children for which it returns False are
          left untouched (neither passed to ``fun`` nor walked).

  Returns:
      Tuple[Node, A]: The rewritten subtree and final accumulator.
  """
  node, acc = fun(node, acc)
  children = node.children()
  if not children:
    return node, acc

  changed = False
  new_children = []
  for child in children:
    if descend is not None and not descend(child):
      new_children.append(child)
      continue
    new_child, acc = fold(child, acc, fun, descend)
    changed = changed or new_child is not child
    new_children.append(new_child)

  if not changed:
    return node, acc
  return node.with_children(new_children), acc


def prewalk(node: Node, fun: Callable[[Node], Node], descend: Optional[Callable[[Node], bool]] = None) -> Node:
  """Pre-order rewrite without an accumulator."""
  new_node, _ = fold(node, None, lambda n, acc: (fun(n), acc), descend)
  return new_node


def walk(node: Node, descend: Optional[Callable[[Node], bool]] = None) -> Iterator[Node]:
  """Yields every node of a subtree in pre-order."""
  yield node
  for child in node.children():
    if descend is not None and not descend(child):
      continue
    yield from walk(child, descend)


def in_scope(node: Node) -> bool:
  """Descend predicate that stays out of nested module bodies and quote regions."""
  return not opens_scope(node)


def scoped_nodes(node: Node) -> Iterator[Node]:
  """Yields the nodes belonging to the same scope as ``node``."""
  return walk(node, in_scope)


def set_line(node: Node, line: Optional[int]) -> Node:
  """Sets the line of every node in the subtree."""
  return prewalk(node, lambda n: n if n.line == line else n.with_changes(line=line))


def shift_line(node: Node, delta: int) -> Node:
  """Moves every positioned node of the subtree by ``delta`` lines."""
  if delta == 0:
    return node
  return prewalk(node, lambda n: n if n.line is None else n.with_changes(line=n.line + delta))
