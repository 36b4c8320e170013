"""
Style Context Module.

Holds the state shared by the styles of a single run: the configuration and
the run's trace logger. A fresh context is created for every invocation, so
nothing leaks from one module definition (or file) to the next.
"""

from typing import Optional

from directive_styler.config import StyleConfig
from directive_styler.core.tracer import TraceLogger


class StyleContext:
  """
  Per-run state container.

  Attributes:
      config (StyleConfig): Read-only configuration.
      tracer (TraceLogger): Event recorder for this run.
      modules_styled (int): Number of module bodies organized so far.
  """

  def __init__(self, config: Optional[StyleConfig] = None, tracer: Optional[TraceLogger] = None) -> None:
    self.config = config or StyleConfig()
    self.tracer = tracer or TraceLogger()
    self.modules_styled = 0
