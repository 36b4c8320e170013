"""
Orchestration Engine for Tree Styling.

This module provides the `StyleEngine`, the driver that applies styles to a
syntax tree. Each style gets its own depth-first walk over the tree
(``Zipper.traverse_while``), in the order the styles are listed; the next style
sees the previous one's output.

Every run is independent: the engine builds a fresh `StyleContext` (config and
trace logger) per call, so one engine may style many modules, even from
several threads.
"""

import traceback
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, InstanceOf

from directive_styler.config import StyleConfig
from directive_styler.core.context import StyleContext
from directive_styler.core.directives import ModuleDirectives
from directive_styler.core.nodes import Node
from directive_styler.core.style import Style
from directive_styler.core.tracer import TraceLogger
from directive_styler.core.zipper import Zipper
from directive_styler.utils.console import log_debug, log_error


class StyleResult(BaseModel):
  """
  Structured result of styling one tree.
  """

  model_config = ConfigDict(arbitrary_types_allowed=True)

  tree: InstanceOf[Node] = Field(description="The styled tree (the input tree if styling failed).")
  changed: bool = Field(default=False, description="True if the styled tree differs from the input.")
  errors: List[str] = Field(default_factory=list, description="Error messages of a failed run.")
  success: bool = Field(default=True, description="True if every style ran to completion.")
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="A log of internal trace events.")

  @property
  def has_errors(self) -> bool:
    """
    Returns True if the run recorded errors.

    Returns:
        bool: True if errors list is non-empty.
    """
    return len(self.errors) > 0


class StyleEngine:
  """
  Applies a sequence of styles to syntax trees.

  Attributes:
      config (StyleConfig): Configuration handed to every run.
      styles (List[Style]): The styles, in application order.
  """

  def __init__(self, config: Optional[StyleConfig] = None, styles: Optional[Sequence[Style]] = None) -> None:
    """
    Initializes the Engine.

    Args:
        config (StyleConfig, optional): Configuration. Defaults to ``StyleConfig()``.
        styles (Sequence[Style], optional): Styles to apply. Defaults to the
            module directives style.
    """
    self.config = config or StyleConfig()
    self.styles: List[Style] = list(styles) if styles is not None else [ModuleDirectives()]

  def run(self, tree: Node) -> StyleResult:
    """
    Styles a tree.

    Args:
        tree (Node): The tree (a module definition, or a block of statements).

    Returns:
        StyleResult: The styled tree with its trace.
    """
    tracer = TraceLogger()
    ctx = StyleContext(self.config, tracer)
    tracer.start_phase("Styling", ", ".join(s.name for s in self.styles))

    styled = tree
    try:
      for style in self.styles:
        tracer.start_phase(style.name)
        styled, ctx = Zipper.zip(styled).traverse_while(style.run, ctx)
        tracer.end_phase()
    except Exception as e:
      log_error(f"Styling failed: {e}")
      tracer.end_phase()
      return StyleResult(
        tree=tree,
        errors=[f"{type(e).__name__}: {e}", traceback.format_exc()],
        success=False,
        trace_events=tracer.export(),
      )

    tracer.end_phase()
    changed = styled != tree
    log_debug(f"Styled {ctx.modules_styled} block(s), changed={changed}")
    return StyleResult(tree=styled, changed=changed, trace_events=tracer.export())

  def style(self, tree: Node) -> Node:
    """
    Styles a tree, returning just the new tree.

    Args:
        tree (Node): The tree.

    Returns:
        Node: The styled tree (the input tree if styling failed).
    """
    return self.run(tree).tree

