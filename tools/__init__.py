# tools package for MCP server tools
# Modules in this package expose `get_tools(provider) -> dict[str, dict]` mapping a tool name to
# {"func": async callable, "title": str, "description": str}.
# The server imports every module here and registers the returned callables as MCP tools.
__all__ = []
