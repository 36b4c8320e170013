"""
Module Directives Style.

Organizes the preamble of every module definition (and of any other block that
contains directives):

* multi-target directives are expanded (``alias Foo.{Bar, Baz}``),
* ``alias Foo`` is deleted,
* ``@behaviour``, ``import``, ``alias`` and ``require`` are sorted and deduplicated,
* directives are grouped in the order ``@shortdoc``, ``@moduledoc``,
  ``@behaviour``, ``use``, ``import``, ``alias``, ``require``,
* ``@moduledoc false`` is added to undocumented modules,
* repeated deep references are lifted into new aliases,
* ``@derive`` is moved above its ``defstruct``.
"""

from typing import Optional, Tuple

from directive_styler.core.context import StyleContext
from directive_styler.core.directives.assembler import moduledoc_for, organize_directives
from directive_styler.core.directives.classifier import DIRECTIVES, DirectiveKind
from directive_styler.core.directives.derive import is_derive, place_derive
from directive_styler.core.nodes import MODULE_DEFINITION, Attribute, Block, Call, Node
from directive_styler.core.style import Style, ensure_block_parent
from directive_styler.core.zipper import Command, Zipper
from directive_styler.utils.console import log_debug
from directive_styler.utils.node_source import capture_node_source


def _module_label(module: Call) -> str:
  return capture_node_source(module.args[0]) if module.args else "<module>"


class ModuleDirectives(Style):
  """
  Style organizing module preambles.
  """

  def run(self, zipper: Zipper, ctx: StyleContext) -> Tuple[Command, Zipper, StyleContext]:
    node = zipper.node
    if isinstance(node, Call) and node.name == MODULE_DEFINITION:
      return self._run_module(zipper, ctx)
    if isinstance(node, Call) and node.name in DIRECTIVES:
      return self._run_directive(zipper, ctx)
    if is_derive(node):
      moved = place_derive(zipper)
      if moved is not None:
        return Command.SKIP, moved, ctx
    return Command.CONT, zipper, ctx

  def _run_module(self, zipper: Zipper, ctx: StyleContext) -> Tuple[Command, Zipper, StyleContext]:
    module = zipper.node
    # `defmodule Foo, do: ...` keeps its one-line form.
    if len(module.args) != 1 or module.do is None:
      return Command.SKIP, zipper, ctx

    label = _module_label(module)
    moduledoc = moduledoc_for(module.args[0], module.line, ctx.config)
    body_zipper = zipper.down().rightmost()
    body = body_zipper.node

    if isinstance(body, Block) and not body.body:
      if moduledoc is not None:
        body_zipper = body_zipper.replace(moduledoc)
      return Command.SKIP, body_zipper, ctx

    if isinstance(body, Block) and len(body.body) >= 2:
      return self._organize(body_zipper, ctx, label, moduledoc)

    only_child = body.body[0] if isinstance(body, Block) else body
    if isinstance(only_child, Attribute) and only_child.name == DirectiveKind.MODULEDOC.value:
      return Command.SKIP, zipper, ctx

    if moduledoc is not None:
      body_zipper = body_zipper.replace(Block((moduledoc, only_child)))
      return self._organize(body_zipper, ctx, label, None)

    if isinstance(body, Block):
      body_zipper = body_zipper.down()
    return self.run(body_zipper, ctx)

  def _organize(
    self, body_zipper: Zipper, ctx: StyleContext, label: str, moduledoc: Optional[Node]
  ) -> Tuple[Command, Zipper, StyleContext]:
    ctx.tracer.start_phase(f"Module {label}", "Organize directives")
    before = capture_node_source(body_zipper.node)
    zipper, command = organize_directives(body_zipper, ctx, moduledoc, lift_aliases=True)
    after = capture_node_source(zipper.up().node) if command == Command.SKIP else capture_node_source(zipper.node)
    if before != after:
      ctx.tracer.log_mutation(label, before, after)
    ctx.tracer.end_phase()
    ctx.modules_styled += 1
    log_debug(f"Organized directives of [module]{label}[/module]")
    return command, zipper, ctx

  def _run_directive(self, zipper: Zipper, ctx: StyleContext) -> Tuple[Command, Zipper, StyleContext]:
    # `def import(foo)` and friends are calls in argument position, not statements.
    statement = ensure_block_parent(zipper)
    if statement is None:
      return Command.CONT, zipper, ctx
    block, command = organize_directives(statement.up(), ctx)
    return command, block, ctx


__all__ = ["ModuleDirectives"]
