"""
Alias Lifting.

Finds module references written out in full (``A.B.C``, three segments or
more) in a module's own scope, and introduces ``alias A.B.C`` so that the
references can be written as ``C``. A reference qualifies when the same full
reference, receiver and called function together (``A.B.C.f()``), is written
at least twice; every occurrence of its module is then shortened.

A module's own scope excludes nested module bodies and ``quote`` regions:
those are independent, and references inside them are neither counted nor
rewritten. References inside module attribute assignments (``@spec``,
``@type``, ...) are not counted or rewritten either.

A candidate is vetoed when its short name:

* is configured as excluded,
* is a standard-library module name,
* is already bound by an ``alias`` anywhere in the module,
* is also the reference's own first segment,
* is also the last segment of a different deep reference in scope (both lose),
* names a module defined directly inside this one,
* is the first segment of any other reference in the module, which the new
  alias would capture.

It is also vetoed when the reference's first segment is bound by an ``alias``
inside the body (``def run do alias X.A ... end``): the reference then means
something else where it is written.

Example::

    A.B.C.f()
    A.B.C.f()

becomes::

    alias A.B.C

    C.f()
    C.f()
"""

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from directive_styler.config import StyleConfig
from directive_styler.core.alias_env import AliasEnv, Path, alias_binding
from directive_styler.core.nodes import MODULE_DEFINITION, Aliases, Attribute, Call, Node, RemoteCall, opens_scope
from directive_styler.core.tracer import TraceLogger
from directive_styler.core.traversal import in_scope, prewalk, walk
from directive_styler.utils.console import log_debug

# Shortest reference worth lifting.
MIN_CHAIN_LENGTH = 3

Chain = Tuple[str, ...]

# A written reference: the module chain and the function called on it, if any.
Reference = Tuple[Chain, Optional[str]]


@dataclass(frozen=True)
class LiftCandidate:
  """
  A repeated deep reference.

  Attributes:
      chain: The reference's segments, as written.
      path: The module the new alias points at (``chain`` with an aliased
          first segment expanded).
      occurrences: Times the most repeated full reference over ``chain`` is
          written in scope.
  """

  chain: Chain
  path: Path
  occurrences: int

  @property
  def name(self) -> str:
    return self.chain[-1]

  def directive(self) -> Call:
    """The ``alias`` directive introducing the short name."""
    return Call("alias", (Aliases(self.path),))


def _countable(statement: Node) -> bool:
  if opens_scope(statement):
    return False
  return not (isinstance(statement, Attribute) and statement.value is not None)


def _is_deep(node: Node) -> bool:
  return isinstance(node, Aliases) and node.is_plain and len(node.segments) >= MIN_CHAIN_LENGTH


def _written_references(node: Node) -> Iterator[Reference]:
  if isinstance(node, RemoteCall) and _is_deep(node.receiver):
    yield node.receiver.segments, node.name
    children: Sequence[Node] = node.args
  else:
    if _is_deep(node):
      yield node.segments, None
    children = node.children()
  for child in children:
    if in_scope(child):
      yield from _written_references(child)


def _chains_in_scope(statements: Iterable[Node]) -> Counter:
  """Maps each deep chain in scope to how often its most repeated full reference is written."""
  references: Counter = Counter()
  for statement in statements:
    if _countable(statement):
      references.update(_written_references(statement))
  chains: Counter = Counter()
  for (chain, _), count in references.items():
    chains[chain] = max(chains[chain], count)
  return chains


def submodule_names(statements: Iterable[Node]) -> Set[str]:
  """First name segments of the modules defined directly in ``statements``."""
  names = set()
  for statement in statements:
    if isinstance(statement, Call) and statement.name == MODULE_DEFINITION and statement.args:
      name = statement.args[0]
      if isinstance(name, Aliases) and isinstance(name.first, str):
        names.add(name.first)
  return names


class AliasLifter:
  """
  Plans and applies alias lifts over one module body.

  Attributes:
      config: Exclusion and standard-library name sets.
      env: Aliases bound by the module's directives.
      tracer: Optional trace logger recording every decision.
  """

  def __init__(self, config: StyleConfig, env: AliasEnv, tracer: Optional[TraceLogger] = None) -> None:
    self.config = config
    self.env = env
    self.tracer = tracer

  def candidates(self, chains: Counter) -> List[LiftCandidate]:
    """
    Chains with a full reference written at least twice in scope, in discovery order.

    A reference whose first segment is already aliased only qualifies when it
    is still deep enough after that prefix is taken away.
    """
    found = []
    for chain, count in chains.items():
      if count < 2:
        continue
      first = chain[0]
      if first in self.env:
        if len(chain) - 1 < MIN_CHAIN_LENGTH:
          continue
        path = self.env[first] + chain[1:]
      else:
        path = chain
      found.append(LiftCandidate(chain, path, count))
    return found

  def veto_reason(
    self,
    candidate: LiftCandidate,
    statements: Sequence[Node],
    directives: Sequence[Node],
    chains: Iterable[Chain],
  ) -> Optional[str]:
    """
    Explains why a candidate may not be lifted.

    Args:
        candidate: The candidate.
        statements: The module's non-directive statements.
        directives: The module's directives.
        chains: Every deep reference in scope.

    Returns:
        Optional[str]: The reason, or None when the lift is safe.
    """
    name = candidate.name
    bound = _bound_names(statements)
    if name in self.config.alias_lifting_exclude:
      return "excluded"
    if name in self.config.stdlib_modules:
      return "standard library"
    if name in self.env or name in bound:
      return "already aliased"
    if candidate.chain[0] in bound:
      return "aliased in a nested block"
    if name == candidate.chain[0]:
      return "shadows itself"
    if any(chain != candidate.chain and chain[-1] == name for chain in chains):
      return "collides with another reference"
    if name in submodule_names(statements):
      return "collides with a submodule"
    for node in _references(statements, directives):
      if node.first == name:
        return "captures another reference"
    return None

  def plan(self, statements: Sequence[Node], directives: Sequence[Node]) -> List[LiftCandidate]:
    """
    Decides which candidates are lifted.

    Args:
        statements: The module's non-directive statements.
        directives: The module's directives.

    Returns:
        List[LiftCandidate]: The promoted candidates.
    """
    chains = _chains_in_scope(statements)
    promoted = []
    for candidate in self.candidates(chains):
      chain_str = ".".join(candidate.chain)
      reason = self.veto_reason(candidate, statements, directives, chains)
      if reason is None:
        promoted.append(candidate)
        log_debug(f"Lifting [module]{chain_str}[/module] as [directive]{candidate.name}[/directive]")
        if self.tracer is not None:
          self.tracer.log_lift(chain_str, candidate.name, candidate.occurrences)
      else:
        log_debug(f"Not lifting {chain_str}: {reason}")
        if self.tracer is not None:
          self.tracer.log_inspection(chain_str, "Skipped", reason)
    return promoted

  def apply(self, statements: Sequence[Node], promoted: Sequence[LiftCandidate]) -> List[Node]:
    """
    Rewrites every in-scope occurrence of the promoted chains to their short name.
    """
    if not promoted:
      return list(statements)
    short: Dict[Chain, str] = {c.chain: c.name for c in promoted}

    def shorten(node: Node) -> Node:
      if isinstance(node, Aliases) and node.segments in short:
        return node.with_changes(segments=(short[node.segments],))
      return node

    return [prewalk(s, shorten, in_scope) if _countable(s) else s for s in statements]

  def lift(self, statements: Sequence[Node], directives: Sequence[Node]) -> Tuple[List[Node], List[Node]]:
    """
    Plans and applies the lifts.

    Returns:
        Tuple[List[Node], List[Node]]: The new ``alias`` directives and the
        rewritten statements.
    """
    promoted = self.plan(statements, directives)
    return [c.directive() for c in promoted], self.apply(statements, promoted)


def _references(statements: Sequence[Node], directives: Sequence[Node]) -> Iterable[Aliases]:
  for root in (*statements, *directives):
    for node in walk(root):
      if isinstance(node, Aliases):
        yield node


def _bound_names(statements: Sequence[Node]) -> Set[str]:
  names = set()
  for statement in statements:
    for node in walk(statement):
      binding = alias_binding(node)
      if binding is not None:
        names.add(binding[0])
  return names
