"""
Alias Environment.

Tracks which short names the ``alias`` directives processed so far have bound,
and expands ("dealiases") references against them. The environment is an
immutable mapping from short name to the canonical segment path; ``define``
returns a new environment, so a caller that threads it left to right sees, at
each directive, exactly the aliases written before it.
"""

from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

from directive_styler.core.nodes import Aliases, Call, Keyword, Node, Segment
from directive_styler.core.traversal import prewalk

Path = Tuple[Segment, ...]


class AliasEnv(Mapping[str, Path]):
  """
  Immutable short-name -> canonical-path mapping.

  ``alias A.B.C`` binds ``C`` to ``(A, B, C)``; ``alias A.B, as: X`` binds ``X``
  to ``(A, B)``.
  """

  __slots__ = ("_bindings",)

  def __init__(self, bindings: Optional[Mapping[str, Path]] = None) -> None:
    self._bindings: Dict[str, Path] = dict(bindings or {})

  def __getitem__(self, name: str) -> Path:
    return self._bindings[name]

  def __iter__(self) -> Iterator[str]:
    return iter(self._bindings)

  def __len__(self) -> int:
    return len(self._bindings)

  def __repr__(self) -> str:
    inner = ", ".join(f"{k}={'.'.join(map(str, v))}" for k, v in self._bindings.items())
    return f"AliasEnv({inner})"

  def define(self, directives: Union[Node, Iterable[Node]]) -> "AliasEnv":
    """
    Extends the environment with the bindings of one or more ``alias`` directives.
    Other nodes and unsupported alias shapes (``alias __MODULE__``) are ignored.

    Args:
        directives: A directive node or an iterable of them.

    Returns:
        AliasEnv: The extended environment.
    """
    nodes = [directives] if isinstance(directives, Node) else list(directives)
    bindings = dict(self._bindings)
    for node in nodes:
      binding = alias_binding(node)
      if binding is not None:
        name, path = binding
        bindings[name] = path
    return AliasEnv(bindings)

  def expand(self, node: Node) -> Node:
    """
    Rewrites every reference in ``node`` whose first segment is bound.

    Args:
        node: Any subtree.

    Returns:
        Node: The dealiased subtree.
    """
    if not self._bindings:
      return node
    return prewalk(node, self.expand_reference)

  def expand_reference(self, node: Node) -> Node:
    """Dealiases a single reference node; other nodes pass through."""
    if isinstance(node, Aliases) and node.segments:
      first = node.segments[0]
      if isinstance(first, str) and first in self._bindings:
        return node.with_changes(segments=self._bindings[first] + node.segments[1:])
    return node


def alias_binding(node: Node) -> Optional[Tuple[str, Path]]:
  """
  Extracts the ``(short_name, path)`` pair bound by an ``alias`` directive.

  Returns:
      Optional[Tuple[str, Path]]: The binding, or None for non-alias nodes and
      shapes that bind nothing this module can track.
  """
  if not isinstance(node, Call) or node.name != "alias" or not node.args:
    return None
  target = node.args[0]
  if not isinstance(target, Aliases) or not target.segments:
    return None
  if len(node.args) == 1:
    last = target.segments[-1]
    return (last, target.segments) if isinstance(last, str) else None
  if len(node.args) == 2 and isinstance(node.args[1], Keyword):
    renamed = node.args[1].get("as")
    if isinstance(renamed, Aliases) and len(renamed.segments) == 1 and isinstance(renamed.segments[0], str):
      return renamed.segments[0], target.segments
  return None
