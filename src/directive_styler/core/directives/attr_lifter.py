"""
Module Attribute Lifting.

Directives are hoisted to the top of their block, above the custom attribute
assignments they may read. Reading ``@attr`` there would observe an unset
attribute, so the value is moved out instead:

1. In the hoisted directive, ``@attr`` becomes the local variable ``attr``
   (``unquote(attr)`` inside ``use``, whose arguments are evaluated when the
   ``use`` macro expands).
2. The assignment ``@attr value`` becomes ``attr = value``, placed before the
   statement that contains the module, and ``@attr attr`` stays behind so
   every other read of ``@attr`` observes the same value.

Example::

    defmodule MyLib do
      @opts [a: 1]
      use Magic, opts: @opts
    end

becomes::

    opts = [a: 1]

    defmodule MyLib do
      @moduledoc false
      use Magic, opts: unquote(opts)
      @opts opts
    end
"""

from typing import Collection, List, Sequence, Tuple

from directive_styler.core.nodes import UNQUOTE, Attribute, BinaryOp, Call, Node, Var
from directive_styler.core.traversal import fold


def lift_module_attrs(node: Node, attrs: Collection[str]) -> Tuple[Node, List[str]]:
  """
  Replaces reads of the given attributes inside a directive.

  Args:
      node: The directive.
      attrs: Names of attributes assigned before the directive.

  Returns:
      Tuple[Node, List[str]]: The rewritten directive and the attribute names
      it read, in reading order.
  """
  if not attrs:
    return node, []

  deferred = isinstance(node, Call) and node.name == "use"

  def replace_read(n: Node, lifted: List[str]) -> Tuple[Node, List[str]]:
    if isinstance(n, Attribute) and n.is_read and n.name in attrs:
      var = Var(n.name, line=n.line)
      replacement = Call(UNQUOTE, (var,), line=n.line) if deferred else var
      return replacement, lifted + [n.name]
    return n, lifted

  return fold(node, [], replace_read)


def hoist_module_attrs(nondirectives: Sequence[Node], lifts: Collection[str]) -> Tuple[List[Node], List[Node]]:
  """
  Splits lifted attribute assignments into local bindings.

  Args:
      nondirectives: The block's non-directive statements.
      lifts: Names of attributes read by hoisted directives.

  Returns:
      Tuple[List[Node], List[Node]]: The statements, with each lifted
      ``@attr value`` turned into ``@attr attr``, and the ``attr = value``
      bindings to insert before the enclosing statement.
  """
  statements: List[Node] = []
  assignments: List[Node] = []
  for node in nondirectives:
    if isinstance(node, Attribute) and node.value is not None and node.name in lifts:
      assignments.append(BinaryOp("=", Var(node.name, line=node.line), node.value, line=node.line))
      node = node.with_changes(value=Var(node.name, line=node.line))
    statements.append(node)
  return statements, assignments
