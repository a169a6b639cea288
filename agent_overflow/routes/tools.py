import json
from typing import Annotated, Any, Callable, Dict, List, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import WithJsonSchema

from ..config import SERVER_NAME, STORAGE_BACKEND
from ..models import Environment, ProblemReport, SearchProblem, Solution
from ..services.simple_storage import SimpleStorage, get_simple_storage
from ..services.solution_store import SolutionStore, get_solution_store
from . import handlers

SSE_PATH = "/sse"
SSE_MESSAGE_PATH = "/sse/message/"
STREAMABLE_HTTP_PATH = "/mcp"

# Arguments arrive as plain dicts so the handlers report validation failures
# in their own envelope; clients still see the full payload schema.
ProblemArg = Annotated[Dict[str, Any], WithJsonSchema(ProblemReport.model_json_schema())]
SearchProblemArg = Annotated[Dict[str, Any], WithJsonSchema(SearchProblem.model_json_schema())]
EnvironmentArg = Annotated[Dict[str, Any], WithJsonSchema(Environment.model_json_schema())]
SolutionArg = Annotated[Dict[str, Any], WithJsonSchema(Solution.model_json_schema())]


def _dump(envelope: Dict[str, Any]) -> str:
    return json.dumps(envelope, indent=2, default=str)


def create_mcp_server(
    backend: str = STORAGE_BACKEND,
    store_provider: Callable[[], SolutionStore] = get_solution_store,
    storage_provider: Callable[[], SimpleStorage] = get_simple_storage,
) -> FastMCP:
    """Build the MCP server and register the tool set for *backend* ("pinecone" or "simple")."""
    mcp = FastMCP(
        SERVER_NAME,
        sse_path=SSE_PATH,
        message_path=SSE_MESSAGE_PATH,
        streamable_http_path=STREAMABLE_HTTP_PATH,
    )

    if backend == "simple":
        _register_simple_tools(mcp, storage_provider)
    elif backend == "pinecone":
        _register_vector_tools(mcp, store_provider)
    else:
        raise ValueError(f"Unknown storage backend {backend!r}")

    return mcp


def _register_vector_tools(mcp: FastMCP, store_provider: Callable[[], SolutionStore]) -> None:
    @mcp.tool(name="upload", description="Upload a bug fix solution")
    async def upload(
        problem: ProblemArg,
        environment: EnvironmentArg,
        solution: SolutionArg,
    ) -> str:
        data = {"problem": problem, "environment": environment, "solution": solution}
        return _dump(await handlers.upload_solution(store_provider(), data))

    @mcp.tool(name="search", description="Search for solutions using vector similarity")
    async def search(problem: SearchProblemArg, environment: EnvironmentArg) -> str:
        data = {"problem": problem, "environment": environment}
        return _dump(await handlers.search_solutions(store_provider(), data))

    @mcp.tool(name="health", description="Check system health")
    async def health() -> str:
        return _dump(await handlers.health(store_provider()))


def _register_simple_tools(mcp: FastMCP, storage_provider: Callable[[], SimpleStorage]) -> None:
    @mcp.tool(name="upload", description="Upload a code snippet with title, description and tags")
    async def upload(title: str, description: str, code: str, tags: List[str]) -> str:
        data = {"title": title, "description": description, "code": code, "tags": tags}
        return _dump(await handlers.upload_entry(storage_provider(), data))

    @mcp.tool(name="search", description="Search stored entries by text")
    async def search(query: str) -> str:
        return _dump(await handlers.search_entries(storage_provider(), {"query": query}))

    @mcp.tool(name="health", description="Check system health")
    async def health() -> str:
        return _dump(await handlers.simple_health())


_mcp_instance: Optional[FastMCP] = None


def get_mcp_server() -> FastMCP:
    global _mcp_instance
    if _mcp_instance is None:
        _mcp_instance = create_mcp_server()
    return _mcp_instance
