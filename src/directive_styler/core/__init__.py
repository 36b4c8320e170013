"""
Core Package.

Contains the styling logic:
- Syntax tree model, builders and cursor (Zipper)
- Traversal helpers and the alias environment
- The module directives style
- Style engine, context and tracer
"""
