"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- `assert_style` fixture: styles a tree, compares the rendered result and
  checks that styling the result again changes nothing.
- Console isolation so tests capturing logs do not leak handlers.
"""

import sys
import textwrap
from pathlib import Path
from typing import Callable, Optional, Union

import pytest

# Add src to path so we can import 'directive_styler' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from directive_styler.config import StyleConfig  # noqa: E402
from directive_styler.core.engine import StyleEngine  # noqa: E402
from directive_styler.core.nodes import Node  # noqa: E402
from directive_styler.utils.console import reset_console  # noqa: E402
from directive_styler.utils.node_source import capture_node_source  # noqa: E402


def render(node: Node) -> str:
  """Source text of a node, for readable assertions."""
  return capture_node_source(node)


def dedent(text: str) -> str:
  return textwrap.dedent(text).strip("\n")


class StyleAssert:
  """
  Styles trees and checks the output and its stability.
  """

  def __init__(self, config: StyleConfig):
    self.config = config

  def __call__(
    self,
    tree: Node,
    expected: Optional[Union[str, Node]] = None,
    config: Optional[StyleConfig] = None,
  ) -> Node:
    """
    Args:
        tree: The input tree.
        expected: Expected source (or tree). None means "unchanged".
        config: Overrides the fixture's configuration.

    Returns:
        Node: The styled tree.
    """
    engine = StyleEngine(config or self.config)
    result = engine.run(tree)
    assert result.success, result.errors

    if expected is None:
      want = render(tree)
    elif isinstance(expected, Node):
      want = render(expected)
    else:
      want = dedent(expected)
    assert render(result.tree) == want

    again = engine.run(result.tree)
    assert again.tree == result.tree, "styling is not idempotent:\n" + render(again.tree)
    return result.tree


@pytest.fixture
def config() -> StyleConfig:
  """Configuration guarding the packaged standard library names."""
  return StyleConfig.with_stdlib()


@pytest.fixture
def assert_style(config) -> Callable[..., Node]:
  """Fixture to style a tree and assert on the rendered output."""
  return StyleAssert(config)


@pytest.fixture(autouse=True)
def isolate_console():
  """Ensures log handlers point at a fresh console for every test."""
  reset_console()
  yield
  reset_console()
