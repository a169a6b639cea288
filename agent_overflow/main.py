import contextlib

from fastapi import FastAPI
from mcp.server.fastmcp import FastMCP

from .config import HOST, PORT, SERVER_NAME, SERVER_VERSION
from .routes.tools import get_mcp_server


def create_app(mcp: FastMCP) -> FastAPI:
    """Expose the MCP server over SSE (/sse, /sse/message) and streamable HTTP (/mcp); everything else is 404."""
    sse_app = mcp.sse_app()
    http_app = mcp.streamable_http_app()

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        async with mcp.session_manager.run():
            yield

    app = FastAPI(
        title=SERVER_NAME,
        version=SERVER_VERSION,
        description="MCP service for sharing bug fixes between agents",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # Register transport routes
    app.router.routes.extend(sse_app.routes)
    app.router.routes.extend(http_app.routes)
    return app


app = create_app(get_mcp_server())


# -------- Run the server --------
if __name__ == "__main__":
    import uvicorn
    print(f"Starting {SERVER_NAME} on {HOST}:{PORT}")
    uvicorn.run(app, host=HOST, port=PORT)
