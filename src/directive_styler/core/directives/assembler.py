"""
Directive Block Assembly.

Reassembles a classified block in the canonical layout::

    @shortdoc
    @moduledoc
    @behaviour
    use
    import
    alias
    require
    <everything else, in original order>

and synthesizes ``@moduledoc false`` for modules that lack documentation.
"""

from typing import List, Optional, Sequence, Tuple

from directive_styler.config import StyleConfig
from directive_styler.core.context import StyleContext
from directive_styler.core.directives.alias_lifting import AliasLifter
from directive_styler.core.directives.attr_lifter import hoist_module_attrs
from directive_styler.core.directives.classifier import PREAMBLE_ORDER, DirectiveKind, collect_directives
from directive_styler.core.directives.sorter import sort_directives
from directive_styler.core.nodes import Aliases, Attribute, Literal, Node
from directive_styler.core.style import find_nearest_block, fix_line_numbers
from directive_styler.core.traversal import set_line
from directive_styler.core.zipper import Command, Zipper
from directive_styler.utils.node_source import capture_node_source

_SORTED = frozenset({DirectiveKind.BEHAVIOUR, DirectiveKind.IMPORT, DirectiveKind.ALIAS, DirectiveKind.REQUIRE})


def moduledoc_for(name: Node, line: Optional[int], config: StyleConfig) -> Optional[Attribute]:
  """
  Builds the ``@moduledoc false`` a module gets when it has no documentation.

  Args:
      name: The module name node.
      line: The line of the ``defmodule``.
      config: Supplies the exempt name suffixes.

  Returns:
      Optional[Attribute]: The attribute on the line after ``defmodule``, or
      None for dynamic names and names with an exempt suffix.
  """
  if not isinstance(name, Aliases) or not isinstance(name.last, str):
    return None
  if name.last.endswith(tuple(config.moduledoc_skip_suffixes)):
    return None
  moduledoc = Attribute("moduledoc", Literal(False))
  return set_line(moduledoc, None if line is None else line + 1)


def _hoist_attrs(parent: Zipper, assignments: Sequence[Node]) -> Zipper:
  # Bindings go before the statement holding the block, then the block is found again.
  past = parent.node
  holder = find_nearest_block(parent.up())
  return holder.prepend_siblings(assignments).find(lambda n: n is past)


def organize_directives(
  parent: Zipper,
  ctx: StyleContext,
  moduledoc: Optional[Node] = None,
  lift_aliases: bool = False,
) -> Tuple[Zipper, Command]:
  """
  Organizes the directives among the children of ``parent``.

  Args:
      parent: Cursor focused on the statement block.
      ctx: Per-run state.
      moduledoc: Documentation to add when the block has none.
      lift_aliases: Whether repeated deep references may become new aliases.

  Returns:
      Tuple[Zipper, Command]: With directives present, the cursor on the last
      directive and SKIP, so the walk resumes with the statements after it.
      Without directives, the cursor on the block and CONT.
  """
  statements = parent.children()
  buckets = collect_directives(statements, collect_attrs=not parent.is_root)

  if not buckets.directives[DirectiveKind.MODULEDOC] and moduledoc is not None:
    buckets.directives[DirectiveKind.MODULEDOC].append(moduledoc)

  nondirectives = buckets.nondirectives
  if buckets.attr_lifts:
    nondirectives, assignments = hoist_module_attrs(nondirectives, buckets.attr_lifts)
    parent = _hoist_attrs(parent, assignments)
    ctx.tracer.log_mutation(
      "module attributes", ", ".join(f"@{a}" for a in buckets.attr_lifts), "\n".join(map(capture_node_source, assignments))
    )

  if lift_aliases and ctx.config.lift_aliases:
    directives = [node for kind in PREAMBLE_ORDER for node in buckets.directives[kind]]
    lifter = AliasLifter(ctx.config, buckets.env, ctx.tracer)
    new_aliases, nondirectives = lifter.lift(nondirectives, directives)
    buckets.directives[DirectiveKind.ALIAS].extend(new_aliases)

  ordered: List[Node] = []
  for kind in PREAMBLE_ORDER:
    group = buckets.directives[kind]
    ordered.extend(sort_directives(group) if kind in _SORTED else group)

  anchor = nondirectives[0] if nondirectives else None
  directives = fix_line_numbers(ordered, anchor)

  if not directives:
    return parent.replace_children(nondirectives), Command.CONT

  zipper = parent.replace_children(directives).down().rightmost().insert_siblings(nondirectives)
  return zipper, Command.SKIP
