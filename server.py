from core.logging_config import setup_logging
from core.config import get_config
from core.client import ClientProvider
from core.errors import WordPressError
from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pathlib import Path
from importlib import import_module
import functools
import logging
import pkgutil
import sys
from typing import Any, Callable, Optional

logger = logging.getLogger("server")

SERVER_NAME = "WordPressElementorMCP"
SERVER_INSTRUCTIONS = "Provides tools to interact with WordPress pages and Elementor data."

TOOLS_PACKAGE = "tools"

###################################################### MCP Tools ######################################################


def make_wrapper(tool_name: str, func: Callable[..., Any]) -> Callable[..., Any]:
    """Wrap a tool handler so WordPress errors reach the caller tagged with their kind.

    The wrapper keeps the handler's signature, which FastMCP uses to build the input schema.
    """

    @functools.wraps(func)
    async def _wrapped(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except WordPressError as e:
            logger.warning("Tool %s failed (%s): %s", tool_name, e.kind.value, e.message)
            raise ToolError(f"{e.kind.value}: {e.message}") from e

    return _wrapped


def register_tools(mcp: FastMCP, provider: ClientProvider, package: str = TOOLS_PACKAGE) -> list[str]:
    """Import every module of `package` and register the tools its `get_tools(provider)` returns."""
    tools_path = Path(__file__).resolve().parent / package
    registered_tool_names: list[str] = []
    for _finder, name, _ispkg in pkgutil.iter_modules([str(tools_path)]):
        if name.startswith("_"):
            continue
        module_name = f"{package}.{name}"
        mod = import_module(module_name)
        if not hasattr(mod, "get_tools"):
            logger.warning(f"Tools module {module_name} has no get_tools(); skipping")
            continue
        logger.info(f"Imported tools module: {module_name}")

        # mapping: tool_name -> { 'func': callable, 'title': str, 'description': str }
        for tool_name, meta in mod.get_tools(provider).items():
            if isinstance(meta, dict):
                func = meta.get("func")
                title = meta.get("title")
                description = meta.get("description")
            else:
                func, title, description = meta, None, None

            if not func:
                logger.warning(f"Tool {tool_name} in {module_name} did not provide a callable; skipping")
                continue
            if tool_name in registered_tool_names:
                raise ValueError(f"Duplicate tool name {tool_name!r} in {module_name}")

            mcp.add_tool(make_wrapper(tool_name, func), name=tool_name, title=title, description=description)
            registered_tool_names.append(tool_name)
            logger.info(f"Added tool: {tool_name} (title={title}) from {module_name}")

    logger.info(f"Total tools registered: {len(registered_tool_names)} , tool names: {registered_tool_names}")
    return registered_tool_names


def build_server(provider: ClientProvider) -> FastMCP:
    """Create the FastMCP server with every tool bound to `provider`."""
    mcp = FastMCP(SERVER_NAME, instructions=SERVER_INSTRUCTIONS)
    register_tools(mcp, provider)
    return mcp


###################################################### Startup ######################################################


def main(environ: Optional[dict] = None) -> None:
    load_dotenv()
    log_cfg = (get_config() or {}).get("logging") or {}
    logs_dir = log_cfg.get("dir")
    # relative to the project, not to whatever cwd the MCP client launched us from
    if logs_dir and not Path(logs_dir).is_absolute():
        logs_dir = Path(__file__).resolve().parent / logs_dir
    setup_logging(
        logs_dir=logs_dir,
        log_file_name=log_cfg.get("file_name", "server.log"),
        level=log_cfg.get("level", "INFO"),
    )
    logger.info("MCP server bootstrap starting.")

    provider = ClientProvider()
    try:
        provider.initialize(environ)
        mcp = build_server(provider)
    except Exception as e:
        logger.exception("MCP server startup failed")
        print(f"Failed to start {SERVER_NAME}: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info("Starting MCP server...")
    try:
        mcp.run(transport="stdio")
        logger.info("MCP server shut down.")
    except Exception:
        logger.exception("Unhandled exception running MCP server")
        print("Unhandled exception occurred. See logs/server.log for details.", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
