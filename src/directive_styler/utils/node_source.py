"""
Node Source Rendering.

Renders syntax tree nodes to their source text "in vacuum". The rendering is
what the directive sorter compares (case-insensitively) and deduplicates on,
and what trace events record as before/after snapshots.

This is not a layout-preserving pretty printer: blank lines, comments and line
widths belong to the external renderer. Blocks are rendered one statement per
line with two-space indentation.
"""

from typing import List, Sequence

from directive_styler.core.nodes import (
  Aliases,
  Atom,
  Attribute,
  BinaryOp,
  Block,
  Call,
  Keyword,
  ListNode,
  Literal,
  ModuleSelf,
  MultiTarget,
  Node,
  Pair,
  RemoteCall,
  Var,
)

INDENT = "  "

# Calls conventionally written without parentheses.
NO_PARENS = frozenset(
  {
    "alias",
    "import",
    "require",
    "use",
    "defmodule",
    "def",
    "defp",
    "defmacro",
    "defmacrop",
    "defstruct",
    "defdelegate",
    "schema",
    "embedded_schema",
    "field",
    "quote",
  }
)


def capture_node_source(node: Node) -> str:
  """
  Renders a node into its source code string representation.

  Args:
      node: The node to serialise.

  Returns:
      str: The source code.
  """
  if isinstance(node, Block):
    return "\n".join(_statements(node, 0))
  return _render(node, 0)


def normalized_source(node: Node) -> str:
  """
  Whitespace-insensitive, lower-cased rendering used as a sort and dedup key.

  Args:
      node: The node to sign.

  Returns:
      str: The normalized source.
  """
  return " ".join(capture_node_source(node).split()).lower()


def _statements(node: Node, depth: int) -> List[str]:
  pad = INDENT * depth
  body = node.body if isinstance(node, Block) else (node,)
  return [pad + _render(stmt, depth) for stmt in body]


def _args(args: Sequence[Node], depth: int) -> str:
  rendered = []
  for idx, arg in enumerate(args):
    if isinstance(arg, Keyword) and idx == len(args) - 1:
      rendered.append(_pairs(arg, depth))
    else:
      rendered.append(_render(arg, depth))
  return ", ".join(rendered)


def _pairs(node: Keyword, depth: int) -> str:
  return ", ".join(_render(p, depth) for p in node.pairs)


def _do_block(head: str, body: Node, depth: int) -> str:
  lines = [f"{head} do"]
  lines.extend(_statements(body, depth + 1))
  lines.append(f"{INDENT * depth}end")
  return "\n".join(lines)


def _render(node: Node, depth: int) -> str:
  if isinstance(node, Literal):
    return _literal(node.value)
  if isinstance(node, Atom):
    return f":{node.name}"
  if isinstance(node, Var):
    return node.name
  if isinstance(node, ModuleSelf):
    return "__MODULE__"
  if isinstance(node, Aliases):
    return ".".join(s if isinstance(s, str) else _render(s, depth) for s in node.segments)
  if isinstance(node, MultiTarget):
    targets = ", ".join(_render(t, depth) for t in node.targets)
    return f"{_render(node.base, depth)}.{{{targets}}}"
  if isinstance(node, Attribute):
    if node.value is None:
      return f"@{node.name}"
    return f"@{node.name} {_render(node.value, depth)}"
  if isinstance(node, Pair):
    return f"{node.key}: {_render(node.value, depth)}"
  if isinstance(node, Keyword):
    return f"[{_pairs(node, depth)}]"
  if isinstance(node, ListNode):
    return "[" + ", ".join(_render(i, depth) for i in node.items) + "]"
  if isinstance(node, BinaryOp):
    return f"{_render(node.left, depth)} {node.op} {_render(node.right, depth)}"
  if isinstance(node, RemoteCall):
    return f"{_render(node.receiver, depth)}.{node.name}({_args(node.args, depth)})"
  if isinstance(node, Call):
    return _call(node, depth)
  if isinstance(node, Block):
    if not node.body:
      return "(\n)"
    return "(\n" + "\n".join(_statements(node, depth + 1)) + f"\n{INDENT * depth})"
  return f"<{type(node).__name__}>"


def _call(node: Call, depth: int) -> str:
  args = _args(node.args, depth)
  if node.name in NO_PARENS:
    head = f"{node.name} {args}" if args else node.name
  else:
    head = f"{node.name}({args})"
  if node.do is None:
    return head
  return _do_block(head, node.do, depth)


def _literal(value: object) -> str:
  if value is True:
    return "true"
  if value is False:
    return "false"
  if value is None:
    return "nil"
  if isinstance(value, str):
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'
  return str(value)
