"""
Console and Logging Utilities.

retext logs through the standard `logging` library (`logging.getLogger(__name__)`
in each module) and installs no handlers on import. Applications and debugging
sessions opt in with `configure_logging`, which routes records to a
`rich` console.

The console itself sits behind a proxy so the destination (stdout, a file, an
in-memory buffer) can be swapped at runtime with `set_console` while modules
keep importing the same `console` object.

Attributes:
    console (_ConsoleProxy): A global, stable reference to the active Rich Console.
"""

import logging
from typing import Any, Optional, Union

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

_THEME = Theme(
  {
    "info": "dim cyan",
    "warning": "yellow",
    "error": "bold red",
    "node.parent": "bold blue",
    "node.leaf": "green",
    "node.data": "dim magenta",
  }
)

_LIBRARY_LOGGER = "retext"


class _ConsoleProxy:
  """
  A Proxy wrapper around `rich.console.Console`.

  All printing operations are forwarded to the backend. If logging has been
  configured, swapping the backend re-points the handler at the new console.

  Attributes:
      _backend (Console): The active Rich Console instance.
  """

  def __init__(self) -> None:
    self._backend: Console = Console(theme=_THEME)
    self._level: Optional[int] = None

  def set_backend(self, new_console: Console) -> None:
    """
    Injects a new Console backend and updates the logging handler, if any.

    Args:
        new_console (Console): The new Rich Console instance to use.
    """
    self._backend = new_console
    if self._level is not None:
      self.configure_logging(self._level)

  def reset(self) -> None:
    """Resets the proxy to a fresh standard output console."""
    self.set_backend(Console(theme=_THEME))

  @property
  def backend(self) -> Console:
    return self._backend

  def configure_logging(self, level: Union[int, str] = logging.INFO) -> logging.Logger:
    """
    Attaches a `RichHandler` bound to the current backend to the `retext` logger.

    Calling it again replaces the previous handler rather than adding a second one.

    Args:
        level: Minimum level to emit.

    Returns:
        logging.Logger: The configured `retext` logger.
    """
    logger = logging.getLogger(_LIBRARY_LOGGER)
    for handler in list(logger.handlers):
      if isinstance(handler, RichHandler):
        logger.removeHandler(handler)

    rich_handler = RichHandler(
      console=self._backend,
      show_time=False,
      omit_repeated_times=False,
      show_path=False,
      markup=False,
      rich_tracebacks=True,
    )
    logger.addHandler(rich_handler)
    logger.setLevel(level)
    self._level = logger.level
    return logger

  def print(self, *args: Any, **kwargs: Any) -> None:
    self._backend.print(*args, **kwargs)

  def export_text(self, **kwargs: Any) -> str:
    """
    Forwards `export_text` (useful for log capturing).

    Returns:
        str: The captured text output.
    """
    return self._backend.export_text(**kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Global helper to inject a specific console instance.

  Args:
      new_console (Console): The configured Rich console to use globally.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  console.reset()


def get_console() -> Console:
  return console.backend


def configure_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
  """
  Routes retext log records to the active rich console.

  Args:
      level: Minimum level to emit (e.g. `logging.DEBUG` or "DEBUG").

  Returns:
      logging.Logger: The configured `retext` logger.
  """
  return console.configure_logging(level)
