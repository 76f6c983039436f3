"""Run the API server."""

import cyclopts
import uvicorn

app = cyclopts.App(name="server", help="API server")


@app.command
def start(host: str = "127.0.0.1", port: int = 8000, reload: bool = False) -> None:
    """Start the API server in the foreground.

    Args:
        host: Host to bind to.
        port: Port to listen on.
        reload: Restart on code changes (development).
    """
    uvicorn.run(
        "carta.application.api.rest.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )
