"""
Node Construction Helpers.

Terse constructors for the syntax tree model. Parser adapters and tests use
these instead of spelling out nested dataclasses by hand, e.g.::

    defmodule("Foo", directive("alias", "A.B", as_="C"), remote("C", "f"))
"""

from typing import Any, Optional, Sequence, Union

from directive_styler.core.nodes import (
  Aliases,
  Atom,
  Attribute,
  BinaryOp,
  Block,
  Call,
  Keyword,
  ListNode,
  Literal,
  ModuleSelf,
  MultiTarget,
  Node,
  Pair,
  RemoteCall,
  Var,
)

NodeLike = Union[Node, str, int, float, bool, None]


def aliases(path: str, line: Optional[int] = None) -> Aliases:
  """
  Creates a dotted module reference.

  Args:
      path (str): Dot-separated path, e.g. ``"Foo.Bar"``. A leading
          ``__MODULE__`` segment becomes a :class:`ModuleSelf` node.
      line (Optional[int]): Source line.

  Returns:
      Aliases: The reference node.
  """
  segments = []
  for part in path.split("."):
    if part == "__MODULE__":
      segments.append(ModuleSelf(line=line))
    else:
      segments.append(part)
  return Aliases(tuple(segments), line=line)


def to_node(value: NodeLike, line: Optional[int] = None) -> Node:
  """
  Coerces a Python value into a node.

  Strings starting with an upper-case letter (or ``__MODULE__``) become module
  references; ``":name"`` becomes an atom; other scalars become literals.
  """
  if isinstance(value, Node):
    return value
  if isinstance(value, str):
    if value.startswith(":"):
      return Atom(value[1:], line=line)
    if value[:1].isupper() or value.startswith("__MODULE__"):
      return aliases(value, line=line)
  return Literal(value, line=line)


def kw(line: Optional[int] = None, **pairs: NodeLike) -> Keyword:
  """Keyword list; a trailing underscore is stripped from keys (``as_=`` -> ``as:``)."""
  return Keyword(tuple(Pair(k.rstrip("_"), to_node(v, line), line=line) for k, v in pairs.items()), line=line)


def multi(base: str, *targets: str, line: Optional[int] = None) -> MultiTarget:
  """Braced multi-target reference ``base.{targets...}``."""
  base_node: Node = ModuleSelf(line=line) if base == "__MODULE__" else aliases(base, line=line)
  return MultiTarget(base_node, tuple(aliases(t, line=line) for t in targets), line=line)


def directive(kind: str, target: NodeLike, line: Optional[int] = None, **opts: NodeLike) -> Call:
  """
  Creates a preamble directive call (``alias``, ``import``, ``require``, ``use``).

  Args:
      kind (str): The directive name.
      target: The target reference (string path or node).
      line (Optional[int]): Source line.
      **opts: Keyword options, e.g. ``as_="C"``.

  Returns:
      Call: The directive node.
  """
  args = [to_node(target, line)]
  if opts:
    args.append(kw(line=line, **opts))
  return Call(kind, tuple(args), line=line)


def attr(name: str, value: Any = ..., line: Optional[int] = None) -> Attribute:
  """Module attribute; omit ``value`` for a read (``@name``)."""
  if value is ...:
    return Attribute(name, None, line=line)
  return Attribute(name, to_node(value, line), line=line)


def call(name: str, *args: NodeLike, do: Optional[Sequence[Node]] = None, line: Optional[int] = None) -> Call:
  """Local call, optionally with a ``do`` body."""
  body = None if do is None else body_of(do, line)
  return Call(name, tuple(to_node(a, line) for a in args), body, line=line)


def remote(receiver: NodeLike, name: str, *args: NodeLike, line: Optional[int] = None) -> RemoteCall:
  """Remote call ``Receiver.name(args)``."""
  return RemoteCall(to_node(receiver, line), name, tuple(to_node(a, line) for a in args), line=line)


def var(name: str, line: Optional[int] = None) -> Var:
  return Var(name, line=line)


def lit(value: Any, line: Optional[int] = None) -> Literal:
  return Literal(value, line=line)


def items(*values: NodeLike, line: Optional[int] = None) -> ListNode:
  return ListNode(tuple(to_node(v, line) for v in values), line=line)


def binop(op: str, left: NodeLike, right: NodeLike, line: Optional[int] = None) -> BinaryOp:
  return BinaryOp(op, to_node(left, line), to_node(right, line), line=line)


def block(*body: Node, line: Optional[int] = None) -> Block:
  return Block(tuple(body), line=line)


def body_of(statements: Sequence[Node], line: Optional[int] = None) -> Node:
  """A ``do`` body: the single statement itself, or a Block for zero or many."""
  if len(statements) == 1:
    return statements[0]
  return Block(tuple(statements), line=line)


def defmodule(name: NodeLike, *body: Node, line: Optional[int] = None) -> Call:
  """``defmodule name do body end``."""
  return Call("defmodule", (to_node(name, line),), body_of(body, line), line=line)


def def_(name: str, *body: Node, args: Sequence[NodeLike] = (), kind: str = "def", line: Optional[int] = None) -> Call:
  """``def name(args) do body end``; ``kind`` selects ``defp``/``defmacro``."""
  head = Call(name, tuple(to_node(a, line) for a in args), line=line)
  return Call(kind, (head,), body_of(body, line), line=line)


def quote(*body: Node, line: Optional[int] = None) -> Call:
  """``quote do body end``."""
  return Call("quote", (), body_of(body, line), line=line)


def unquote(value: NodeLike, line: Optional[int] = None) -> Call:
  return Call("unquote", (to_node(value, line),), line=line)
