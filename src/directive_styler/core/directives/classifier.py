"""
Directive Classification and Multi-Target Expansion.

Partitions the immediate children of a statement block into the preamble
categories and everything else, in one left-to-right pass:

* ``@shortdoc`` / ``@moduledoc`` / ``@behaviour`` are attribute directives.
* ``use`` / ``import`` / ``alias`` / ``require`` calls are directives.
* Any other ``@name value`` is a custom attribute assignment (a non-directive
  whose name is remembered for attribute lifting).
* Everything else is a non-directive, kept in order.

The pass threads the alias environment: directives that will be hoisted above
the alias block are dealiased against the aliases written before them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Sequence

from directive_styler.core.alias_env import AliasEnv
from directive_styler.core.directives.attr_lifter import lift_module_attrs
from directive_styler.core.nodes import Aliases, Attribute, Call, ModuleSelf, MultiTarget, Node


class DirectiveKind(str, Enum):
  """Preamble categories, declared in output order."""

  SHORTDOC = "shortdoc"
  MODULEDOC = "moduledoc"
  BEHAVIOUR = "behaviour"
  USE = "use"
  IMPORT = "import"
  ALIAS = "alias"
  REQUIRE = "require"


PREAMBLE_ORDER = tuple(DirectiveKind)

DIRECTIVES: FrozenSet[str] = frozenset({"alias", "import", "require", "use"})
ATTR_DIRECTIVES: FrozenSet[str] = frozenset({"moduledoc", "shortdoc", "behaviour"})

# Directives written above the alias block and therefore resolved at their original position.
_DEALIASED = frozenset({DirectiveKind.USE, DirectiveKind.IMPORT, DirectiveKind.ALIAS})


def classify(node: Node) -> Optional[DirectiveKind]:
  """
  Returns the preamble category of a statement, or None for non-directives.
  """
  if isinstance(node, Attribute) and node.name in ATTR_DIRECTIVES and node.value is not None:
    return DirectiveKind(node.name)
  if isinstance(node, Call) and node.name in DIRECTIVES:
    return DirectiveKind(node.name)
  return None


def is_attr_assignment(node: Node) -> bool:
  """True for a custom ``@name value`` statement."""
  return isinstance(node, Attribute) and node.value is not None and node.name not in ATTR_DIRECTIVES


def expand(node: Node) -> List[Node]:
  """
  Expands a directive into the directives it stands for.

  * ``alias Root`` aliases a name to itself and expands to nothing.
  * ``kind Root.{A, B.C}`` expands to ``kind Root.A`` and ``kind Root.B.C``;
    each new directive takes its target's line, else the original's line.
    ``Root`` may be ``__MODULE__``.
  * Anything else expands to itself.

  Args:
      node: A classified directive (other nodes pass through).

  Returns:
      List[Node]: The expanded directives, in reading order.
  """
  if not isinstance(node, Call) or node.name not in DIRECTIVES or len(node.args) != 1:
    return [node]

  target = node.args[0]
  if node.name == "alias" and isinstance(target, Aliases) and len(target.segments) == 1 and target.is_plain:
    return []

  if not isinstance(target, MultiTarget):
    return [node]

  if isinstance(target.base, Aliases):
    base = target.base.segments
  elif isinstance(target.base, ModuleSelf):
    base = (target.base,)
  else:
    return [node]

  if not all(isinstance(t, Aliases) and t.is_plain for t in target.targets):
    return [node]

  expanded: List[Node] = []
  for t in target.targets:
    line = t.line if t.line is not None else node.line
    expanded.append(Call(node.name, (Aliases(base + t.segments, line=line),), line=line))
  return expanded


def _dealias_alias(env: AliasEnv, node: Node) -> Node:
  # Only the aliased path is resolved; an `as:` name is a binding, not a reference.
  if isinstance(node, Call) and node.args:
    return node.with_changes(args=(env.expand(node.args[0]), *node.args[1:]))
  return node


@dataclass
class DirectiveBuckets:
  """
  Result of classifying a block's statements.

  Attributes:
      directives: Directives per category, in original order.
      nondirectives: Remaining statements, in original order.
      env: Alias environment after every ``alias`` directive.
      attrs: Custom attribute names assigned in the block.
      attr_lifts: Attribute names read by a directive, in discovery order.
  """

  directives: Dict[DirectiveKind, List[Node]] = field(default_factory=lambda: {k: [] for k in DirectiveKind})
  nondirectives: List[Node] = field(default_factory=list)
  env: AliasEnv = field(default_factory=AliasEnv)
  attrs: List[str] = field(default_factory=list)
  attr_lifts: List[str] = field(default_factory=list)

  @property
  def has_directives(self) -> bool:
    return any(self.directives.values())

  def _note_lifts(self, lifted: Sequence[str]) -> None:
    for name in lifted:
      if name not in self.attr_lifts:
        self.attr_lifts.append(name)

  def add(self, node: Node, collect_attrs: bool = True) -> None:
    """
    Classifies one statement and files it.

    Args:
        node: The statement.
        collect_attrs: When False, attribute assignments are not remembered,
            so directives keep reading ``@attr`` as written.
    """
    kind = classify(node)

    if kind is None:
      if collect_attrs and is_attr_assignment(node) and node.name not in self.attrs:
        self.attrs.append(node.name)
      self.nondirectives.append(node)
      return

    if kind.value in ATTR_DIRECTIVES:
      node, lifted = lift_module_attrs(self.env.expand(node), self.attrs)
      self._note_lifts(lifted)
      self.directives[kind].append(node)
      return

    node, lifted = lift_module_attrs(node, self.attrs)
    self._note_lifts(lifted)
    expanded = expand(node)
    if kind is DirectiveKind.ALIAS:
      expanded = [_dealias_alias(self.env, n) for n in expanded]
      self.env = self.env.define(expanded)
    elif kind in _DEALIASED:
      expanded = [self.env.expand(n) for n in expanded]
    self.directives[kind].extend(expanded)


def collect_directives(statements: Sequence[Node], collect_attrs: bool = True) -> DirectiveBuckets:
  """
  Classifies ``statements`` in order.

  Args:
      statements: The immediate children of a block.
      collect_attrs: Whether attribute assignments feed attribute lifting.

  Returns:
      DirectiveBuckets: The categorized statements.
  """
  buckets = DirectiveBuckets()
  for node in statements:
    buckets.add(node, collect_attrs)
  return buckets
