"""
Script Frontend.

Parses TypeScript sources with tree-sitter and lifts them into the node set
consumed by the split pass.
"""

from ts_hotswap.frontend.parser import SUPPORTED_DIALECTS, TypeScriptParser

__all__ = ["SUPPORTED_DIALECTS", "TypeScriptParser"]
