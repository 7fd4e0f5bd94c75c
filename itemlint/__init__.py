# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
itemlint: warns when items are declared after statements inside a block.

Pipeline:
  source -> parser (lark, macro bodies expanded with marked spans)
         -> lints.walk (every block, outer first)
         -> lint passes (items_after_statements)
         -> diagnostics (human or JSON via the CLI)
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
