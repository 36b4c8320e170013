"""
Directive Sorting and Deduplication.

Directives within a category are ordered by their lower-cased source text, and
directives whose text is identical (ignoring case and whitespace) collapse to
the first one. ``use`` directives are never passed through here: expanding a
``use`` runs code, so their order is significant.
"""

from typing import Dict, List, Sequence

from directive_styler.core.nodes import Node
from directive_styler.utils.node_source import normalized_source


def sort_directives(directives: Sequence[Node]) -> List[Node]:
  """
  Sorts and deduplicates a category of directives.

  Args:
      directives: Directives in original order.

  Returns:
      List[Node]: Unique directives sorted case-insensitively. Among duplicates
      the earliest one (with its line) is kept.
  """
  unique: Dict[str, Node] = {}
  for node in directives:
    unique.setdefault(normalized_source(node), node)
  return [unique[key] for key in sorted(unique)]
