"""API server command."""

import click

from ..config import Settings
from ..db.engine import get_db_path
from .base import ensure_initialized


@click.command()
@click.option("--host", default="127.0.0.1", help="Interface to listen on")
@click.option("--port", "-p", default=8000, type=int, help="Port to listen on")
@click.option("--reload", is_flag=True, help="Restart on code changes")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, reload: bool):
    """Serve the JSON API for progress, workouts and cardio.

    Interactive API docs are at /docs once the server is up.
    """
    ensure_initialized(ctx)

    import uvicorn

    from ..web import create_app

    settings = Settings.from_env()
    click.echo(click.style(f"wave-lift API on http://{host}:{port}", fg="green"))
    click.echo(f"  Database: {get_db_path(settings.data_dir)}")

    uvicorn.run(
        "wave_lift.web:create_app" if reload else create_app(settings=settings),
        host=host,
        port=port,
        reload=reload,
        factory=reload,
    )
