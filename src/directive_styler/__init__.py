"""
directive-styler Package.

A deterministic rewriting core that organizes the preamble of module
definitions (``@moduledoc``, ``@behaviour``, ``use``, ``import``, ``alias``,
``require``) into one canonical layout, and lifts repeated deep module
references into new aliases.

Parsing source text and rendering the tree back out belong to the caller; this
package works on the syntax tree model in ``directive_styler.core.nodes``.

Usage
-----

Styling a Tree
^^^^^^^^^^^^^^

.. code-block:: python

    from directive_styler import style
    from directive_styler.core.builders import defmodule, directive, remote

    tree = defmodule(
        "Foo",
        directive("alias", "Foo.Zed"),
        directive("alias", "Foo.Bar"),
        remote("A.B.C", "f"),
        remote("A.B.C", "g"),
        line=1,
    )
    styled = style(tree)

Advanced Usage (Style Engine)
^^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from directive_styler import StyleConfig, StyleEngine

    config = StyleConfig.with_stdlib(alias_lifting_exclude={"Repo"})
    res = StyleEngine(config).run(tree)

    if res.success:
        print(res.changed, len(res.trace_events))
    else:
        print(f"Errors: {res.errors}")
"""

from typing import Optional

from directive_styler.config import StyleConfig
from directive_styler.core.engine import StyleEngine, StyleResult
from directive_styler.core.nodes import Node

__version__ = "0.0.1"


def style(tree: Node, config: Optional[StyleConfig] = None) -> Node:
  """
  Organizes the module directives of a tree.

  This is a convenience wrapper around the `StyleEngine`.

  Args:
      tree (Node): A module definition, or a block of statements.
      config (StyleConfig, optional): Configuration. Defaults to
          ``StyleConfig.with_stdlib()``, which guards the packaged standard
          library names against alias lifting.

  Returns:
      Node: The styled tree.

  Raises:
      ValueError: If styling fails.
  """
  engine = StyleEngine(config or StyleConfig.with_stdlib())
  result = engine.run(tree)

  if not result.success:
    error_msg = "\n".join(result.errors)
    raise ValueError(f"Styling failed:\n{error_msg}")

  return result.tree


__all__ = [
  "style",
  "StyleConfig",
  "StyleEngine",
  "StyleResult",
  "__version__",
]
