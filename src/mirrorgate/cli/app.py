"""CLI application factory."""

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from ..app import create_app, require_executable
from ..config.settings import LogLevel, Settings, build_settings
from ..domain.exceptions import ExecutableNotFoundError
from .state import CLIState, ServerRunner


def _format_validation_error(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in item['loc'])}: {item['msg']}"
        for item in error.errors()
    )


def create_cli_app(
    settings: Settings | None = None,
    server_runner: ServerRunner | None = None,
) -> typer.Typer:
    """Create CLI application with optional overrides.

    Args:
        settings: Optional Settings override for testing. When given, CLI
                 options are ignored.
        server_runner: Optional replacement for the blocking server loop.

    Returns:
        Configured Typer application with commands registered
    """
    app = typer.Typer(
        name="mirrorgate",
        help="mirrorgate - queue FTP mirror jobs over HTTP and run them with lftp",
        no_args_is_help=True,
    )

    @app.callback()
    def setup(
        ctx: typer.Context,
        verbose: bool = typer.Option(
            False,
            "--verbose",
            "-v",
            help="Enable verbose output (DEBUG logging)",
        ),
    ) -> None:
        """Global options available to all commands."""
        state = CLIState(
            settings=settings,
            log_level=LogLevel.DEBUG if verbose else None,
        )
        if server_runner is not None:
            state.server_runner = server_runner
        ctx.obj = state

    @app.command()
    def serve(
        ctx: typer.Context,
        secret: Optional[str] = typer.Option(
            None,
            "--secret",
            "-s",
            envvar="MIRRORGATE_SECRET",
            help="Shared secret callers must send with each request",
        ),
        port: Optional[int] = typer.Option(
            None, "--port", help="Port to listen on (1024-65535)"
        ),
        host: Optional[str] = typer.Option(None, "--host", help="Interface to bind"),
        segments: Optional[int] = typer.Option(
            None, "--segments", "-n", help="Parallel segments per file (1-100)"
        ),
        files: Optional[int] = typer.Option(
            None, "--files", "-p", help="Parallel files when mirroring (1-10)"
        ),
        output_dir: Optional[Path] = typer.Option(
            None,
            "--output-dir",
            "-o",
            help="Directory to write transfers to (default: current directory)",
        ),
    ) -> None:
        """Serve the /jsonrpc endpoint and run admitted jobs one at a time.

        Examples:
            mirrorgate serve --secret s3cret
            mirrorgate serve --secret s3cret --port 7800 -n 8 -p 4 -o /srv/ftp
        """
        state: CLIState = ctx.obj

        resolved = state.settings
        if resolved is None:
            try:
                resolved = build_settings(
                    secret=secret,
                    port=port,
                    host=host,
                    segments=segments,
                    files=files,
                    output_dir=output_dir,
                    log_level=state.log_level,
                )
            except ValidationError as e:
                typer.secho(
                    f"✗ Invalid configuration: {_format_validation_error(e)}",
                    fg=typer.colors.RED,
                )
                raise typer.Exit(code=1)

        try:
            require_executable(resolved.executable)
        except ExecutableNotFoundError as e:
            typer.secho(f"✗ {e}", fg=typer.colors.RED)
            raise typer.Exit(code=1)

        state.server_runner(create_app(resolved))

    return app
