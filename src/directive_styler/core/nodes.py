"""
Syntax Tree Node Model.

This module defines the immutable node classes that make up a module-definition
syntax tree. The model follows the shape of the macro language's own quoted
form: blocks of statements, local and remote calls, dotted module references
(``A.B.C``), module attributes (``@name value``) and keyword lists.

Nodes are frozen dataclasses. Edits never mutate a node in place; instead
``with_changes`` returns a modified copy and ``with_children`` rebuilds a node
around a new list of child nodes. The generic ``children`` / ``with_children``
pair is what the :class:`~directive_styler.core.zipper.Zipper` and the
traversal helpers use to walk any node kind without knowing its fields.

Every node carries an optional keyword-only ``line`` (its source position).
"""

import dataclasses
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Tuple, Union


@dataclass(frozen=True)
class Node:
  """
  Base class for every syntax node.

  Attributes:
      line (Optional[int]): Source line of the node, if known.
  """

  line: Optional[int] = field(default=None, kw_only=True)

  def children(self) -> List["Node"]:
    """
    Returns the direct child nodes, in reading order.

    Returns:
        List[Node]: Child nodes (empty for leaves).
    """
    return []

  def with_children(self, children: Sequence["Node"]) -> "Node":
    """
    Rebuilds this node around a new sequence of children.

    Args:
        children: Replacement children, in the order produced by ``children()``.

    Returns:
        Node: The rebuilt node.
    """
    return self

  def with_changes(self, **changes: Any) -> "Node":
    """
    Returns a copy of this node with the given fields replaced.

    Args:
        **changes: Field values to override.

    Returns:
        Node: The modified copy.
    """
    return dataclasses.replace(self, **changes)


@dataclass(frozen=True)
class Block(Node):
  """A sequence of statements (a ``do`` body, a script, a quote body)."""

  body: Tuple[Node, ...] = ()

  def children(self) -> List[Node]:
    return list(self.body)

  def with_children(self, children: Sequence[Node]) -> "Block":
    return dataclasses.replace(self, body=tuple(children))


@dataclass(frozen=True)
class Literal(Node):
  """A string, number, boolean or nil (``None``) literal."""

  value: Any = None


@dataclass(frozen=True)
class Atom(Node):
  """An atom literal such as ``:ok``."""

  name: str = ""


@dataclass(frozen=True)
class Var(Node):
  """A bare identifier: a variable or a zero-argument local reference."""

  name: str = ""


@dataclass(frozen=True)
class ModuleSelf(Node):
  """The enclosing module's self-reference (``__MODULE__``)."""


Segment = Union[str, Node]


@dataclass(frozen=True)
class Aliases(Node):
  """
  A dotted module reference such as ``Foo.Bar.Baz``.

  Segments are plain strings, except that the first segment may be a node
  (``__MODULE__.Foo`` or ``unquote(mod).Foo``).
  """

  segments: Tuple[Segment, ...] = ()

  @property
  def is_plain(self) -> bool:
    """True when every segment is a plain name."""
    return bool(self.segments) and all(isinstance(s, str) for s in self.segments)

  @property
  def first(self) -> Optional[Segment]:
    return self.segments[0] if self.segments else None

  @property
  def last(self) -> Optional[Segment]:
    return self.segments[-1] if self.segments else None

  def children(self) -> List[Node]:
    return [s for s in self.segments if isinstance(s, Node)]

  def with_children(self, children: Sequence[Node]) -> "Aliases":
    replacements = iter(children)
    segments = tuple(next(replacements) if isinstance(s, Node) else s for s in self.segments)
    return dataclasses.replace(self, segments=segments)


@dataclass(frozen=True)
class MultiTarget(Node):
  """A braced multi-target reference: ``Root.{A, B.C}``."""

  base: Node = field(default_factory=ModuleSelf)
  targets: Tuple[Node, ...] = ()

  def children(self) -> List[Node]:
    return [self.base, *self.targets]

  def with_children(self, children: Sequence[Node]) -> "MultiTarget":
    return dataclasses.replace(self, base=children[0], targets=tuple(children[1:]))


@dataclass(frozen=True)
class Call(Node):
  """
  A local call, e.g. ``alias Foo.Bar, as: Baz`` or ``defmodule Foo do ... end``.

  Attributes:
      name (str): The called function or macro.
      args (Tuple[Node, ...]): Positional arguments; a trailing ``Keyword`` holds options.
      do (Optional[Node]): The ``do`` body, either a ``Block`` or a single node.
  """

  name: str = ""
  args: Tuple[Node, ...] = ()
  do: Optional[Node] = None

  def children(self) -> List[Node]:
    if self.do is None:
      return list(self.args)
    return [*self.args, self.do]

  def with_children(self, children: Sequence[Node]) -> "Call":
    if self.do is None:
      return dataclasses.replace(self, args=tuple(children))
    return dataclasses.replace(self, args=tuple(children[:-1]), do=children[-1])


@dataclass(frozen=True)
class RemoteCall(Node):
  """A call through a receiver: ``A.B.C.fun(args)``."""

  receiver: Node = field(default_factory=ModuleSelf)
  name: str = ""
  args: Tuple[Node, ...] = ()

  def children(self) -> List[Node]:
    return [self.receiver, *self.args]

  def with_children(self, children: Sequence[Node]) -> "RemoteCall":
    return dataclasses.replace(self, receiver=children[0], args=tuple(children[1:]))


@dataclass(frozen=True)
class Attribute(Node):
  """A module attribute: ``@name value`` when assigned, ``@name`` when read."""

  name: str = ""
  value: Optional[Node] = None

  @property
  def is_read(self) -> bool:
    return self.value is None

  def children(self) -> List[Node]:
    return [] if self.value is None else [self.value]

  def with_children(self, children: Sequence[Node]) -> "Attribute":
    if self.value is None:
      return self
    return dataclasses.replace(self, value=children[0])


@dataclass(frozen=True)
class Pair(Node):
  """A single ``key: value`` entry of a keyword list."""

  key: str = ""
  value: Node = field(default_factory=lambda: Literal(None))

  def children(self) -> List[Node]:
    return [self.value]

  def with_children(self, children: Sequence[Node]) -> "Pair":
    return dataclasses.replace(self, value=children[0])


@dataclass(frozen=True)
class Keyword(Node):
  """A keyword list such as ``as: Baz, only: [f: 1]``."""

  pairs: Tuple[Pair, ...] = ()

  def get(self, key: str) -> Optional[Node]:
    for pair in self.pairs:
      if pair.key == key:
        return pair.value
    return None

  def children(self) -> List[Node]:
    return list(self.pairs)

  def with_children(self, children: Sequence[Node]) -> "Keyword":
    return dataclasses.replace(self, pairs=tuple(children))


@dataclass(frozen=True)
class ListNode(Node):
  """A list literal."""

  items: Tuple[Node, ...] = ()

  def children(self) -> List[Node]:
    return list(self.items)

  def with_children(self, children: Sequence[Node]) -> "ListNode":
    return dataclasses.replace(self, items=tuple(children))


@dataclass(frozen=True)
class BinaryOp(Node):
  """A binary operator application (``=``, ``|>``, ``::``, ...)."""

  op: str = ""
  left: Node = field(default_factory=lambda: Literal(None))
  right: Node = field(default_factory=lambda: Literal(None))

  def children(self) -> List[Node]:
    return [self.left, self.right]

  def with_children(self, children: Sequence[Node]) -> "BinaryOp":
    return dataclasses.replace(self, left=children[0], right=children[1])


# Calls that open a nested scope with its own preamble.
MODULE_DEFINITION = "defmodule"
QUOTE = "quote"
UNQUOTE = "unquote"


def is_module_definition(node: Node) -> bool:
  """True for ``defmodule Name do ... end`` (the block form)."""
  return isinstance(node, Call) and node.name == MODULE_DEFINITION and len(node.args) == 1 and node.do is not None


def is_quote(node: Node) -> bool:
  """True for a ``quote do ... end`` template region."""
  return isinstance(node, Call) and node.name == QUOTE


def opens_scope(node: Node) -> bool:
  """True for nodes whose contents belong to an independent scope."""
  return (isinstance(node, Call) and node.name == MODULE_DEFINITION) or is_quote(node)
