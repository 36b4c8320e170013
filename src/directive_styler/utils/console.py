"""
Logging and Console Output.

Diagnostics go through the standard ``logging`` package and are rendered by
``rich``. Styling runs inside editors and formatters that own the terminal, so
the destination console sits behind a proxy: ``set_console`` re-targets every
message without the modules that imported ``console`` noticing.

Attributes:
    console (_ConsoleProxy): Stable handle on the active Rich Console.
    logger (logging.Logger): The package logger, ``directive_styler``.
"""

import logging
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

LOGGER_NAME = "directive_styler"

# Markup tags usable in log messages, e.g. "[module]Foo.Bar[/module]".
STYLE_THEME = Theme(
  {
    "info": "dim cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "green",
    "directive": "bold magenta",
    "module": "bold blue",
  }
)

logger = logging.getLogger(LOGGER_NAME)


def _make_handler(target: Console) -> RichHandler:
  return RichHandler(
    console=target,
    show_time=False,
    show_path=False,
    markup=True,
    rich_tracebacks=True,
  )


class _ConsoleProxy:
  """
  Forwards printing to a replaceable Rich Console.

  The proxy owns exactly one ``RichHandler`` on the package logger and swaps
  it whenever the backend changes.

  Attributes:
      _backend (Console): Where output currently goes.
      _handler (Optional[RichHandler]): The handler installed for ``_backend``.
  """

  def __init__(self) -> None:
    self._handler: Optional[RichHandler] = None
    self._backend = self._attach(Console(theme=STYLE_THEME))

  @property
  def backend(self) -> Console:
    return self._backend

  def set_backend(self, new_console: Console) -> None:
    """
    Routes printing and logging to ``new_console``.

    Args:
        new_console (Console): The replacement console.
    """
    self._backend = self._attach(new_console)

  def reset(self) -> None:
    """Routes output back to a fresh standard output console."""
    self._backend = self._attach(Console(theme=STYLE_THEME))

  def _attach(self, target: Console) -> Console:
    if self._handler is not None:
      logger.removeHandler(self._handler)
    self._handler = _make_handler(target)
    logger.addHandler(self._handler)
    if logger.level == logging.NOTSET:
      logger.setLevel(logging.INFO)
    return target

  def print(self, *args: Any, **kwargs: Any) -> None:
    self._backend.print(*args, **kwargs)

  def export_text(self, **kwargs: Any) -> str:
    """
    Returns what a recording console captured.

    Args:
        **kwargs: Passed to ``Console.export_text``.

    Returns:
        str: The captured text.
    """
    return self._backend.export_text(**kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Sends all further output to ``new_console``.

  Args:
      new_console (Console): A configured Rich console, e.g. one created with
          ``record=True`` to capture a styling run.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  console.reset()


def get_console() -> Console:
  """Returns the console output currently goes to."""
  return console.backend


def _emit(level: int, prefix: str, msg: str) -> None:
  logger.log(level, f"{prefix}{msg}", extra={"markup": True})


def log_debug(msg: str) -> None:
  """
  Logs a styling decision. Hidden unless the package logger is at DEBUG.

  Args:
      msg (str): The message; may contain theme markup.
  """
  _emit(logging.DEBUG, "", msg)


def log_info(msg: str) -> None:
  _emit(logging.INFO, "ℹ️  ", msg)


def log_success(msg: str) -> None:
  _emit(logging.INFO, "✅ ", msg)


def log_warning(msg: str) -> None:
  _emit(logging.WARNING, "⚠️  ", msg)


def log_error(msg: str) -> None:
  """
  Logs a failed styling run.

  Args:
      msg (str): The message.
  """
  _emit(logging.ERROR, "❌ ", msg)
