"""Run the intelligence API server."""

import click
import uvicorn


@click.command()
@click.option("--host", default="127.0.0.1", help="Bind address")
@click.option("--port", default=8000, type=int, help="Bind port")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
def serve(host: str, port: int, reload: bool):
    """Serve /api/intelligence/* with uvicorn."""
    uvicorn.run("web.app:app", host=host, port=port, reload=reload, log_config=None)
