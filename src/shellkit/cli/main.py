import sys
from pathlib import Path
from typing import cast

import typer

from ..core import config as config_module
from ..core.config import Settings
from ..core.errors import ShellkitError
from ..core.logging import LogFormat, log, setup_logging

app = typer.Typer(add_completion=False, no_args_is_help=True, help="Shellkit file utilities")


def _fail(error: ShellkitError) -> None:
    """Report a ShellkitError as a single line and exit non-zero."""
    typer.echo(f"❌ {error.kind}: {error.message}", err=True)
    raise typer.Exit(1) from error


@app.callback()
def main_callback(
    config_file: str | None = typer.Option(
        None,
        "--config",
        help="Config file (.shellkit.yaml auto-discovered)",
    ),
    log_format: str | None = typer.Option(None, "--log-format", help="Logging format: json|plain|auto"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress events to stderr"),
) -> None:
    """Load configuration and set up logging before any command runs."""
    # Config precedence: config file < env vars < CLI flags
    try:
        settings = Settings.load_config(config_file)
    except Exception as e:
        typer.echo(f"❌ Config error: {e}", err=True)
        raise typer.Exit(1) from e

    if log_format:
        settings.LOG_FORMAT = log_format
    if verbose:
        settings.LOG_LEVEL = "info"
    config_module.SETTINGS = settings

    setup_logging(cast(LogFormat, settings.LOG_FORMAT), settings.LOG_LEVEL)
    log.info("config.loaded", config_file=config_file or "auto-discovered")


@app.command()
def version() -> None:
    from .. import __version__

    typer.echo(__version__)


@app.command()
def config(
    as_json: bool = typer.Option(False, "--json", help="Print settings as JSON"),
) -> None:
    """Show the effective configuration."""
    settings = config_module.SETTINGS
    if as_json:
        typer.echo(settings.model_dump_json(indent=2))
        return
    for k, v in settings.model_dump().items():
        typer.echo(f"{k}={v}")


@app.command()
def chunk(
    path: str = typer.Option(..., "--path", "-p", help="File to split"),
    destination: str | None = typer.Option(
        None, "--destination", "-d", help="Output directory (default: the source's directory)"
    ),
    base_name: str | None = typer.Option(
        None, "--base-name", "-n", help="Output name prefix (default: source name without extension)"
    ),
    chunk_size: str | None = typer.Option(
        None, "--chunk-size", "-s", help="Bytes per part, e.g. 4096, 512KB, 10MB, 1GB"
    ),
    part_count: int | None = typer.Option(None, "--part-count", "-c", help="Number of parts"),
    char_count: int | None = typer.Option(None, "--char-count", help="Characters per part (text files)"),
    encoding: str | None = typer.Option(
        None, "--encoding", help="Text encoding for --char-count when the file has no BOM"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    progress: bool = typer.Option(True, "--progress/--no-progress", help="Show a progress bar on a TTY"),
) -> None:
    """
    Split a file into numbered parts.

    Exactly one of --chunk-size, --part-count or --char-count selects the
    strategy. Parts are named NAME_<size|part|char>_partNNNN.EXT and written
    next to the source unless --destination is given.

    --part-count rounds the part size up, so fewer parts than requested can
    be produced (a 9-byte file split into 4 parts gives 3 parts of 3 bytes).

    Example:
        shellkit chunk -p backup.tar -s 100MB
        shellkit chunk -p notes.txt --char-count 5000 -d out/
    """
    from ..chunking import SplitPlan, chunk_file, parse_size
    from ..core.progress import ChunkProgress, should_use_pretty

    settings = config_module.SETTINGS
    try:
        plan = SplitPlan.from_options(
            chunk_size=parse_size(chunk_size) if chunk_size is not None else None,
            part_count=part_count,
            char_count=char_count,
        )
        source = Path(path).expanduser()
        total = source.stat().st_size if source.is_file() else 0
        show_progress = progress and settings.PROGRESS and not as_json and should_use_pretty()

        with ChunkProgress(
            total=total,
            description=f"Splitting {source.name}",
            enabled=show_progress,
            no_color=settings.NO_COLOR,
        ) as bar:
            result = chunk_file(
                source,
                plan,
                destination=destination,
                base_name=base_name,
                encoding=encoding,
                on_chunk=lambda descriptor: bar.advance(descriptor.bytes_written),
            )
    except ShellkitError as e:
        _fail(e)
        return

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
    else:
        typer.echo(f"✅ {result.summary()}")


@app.command()
def join(
    first_chunk: str = typer.Argument(..., help="Any part file produced by 'shellkit chunk'"),
    output: str = typer.Option(..., "--output", "-o", help="File to write the reassembled content to"),
    encoding: str | None = typer.Option(
        None, "--encoding", help="Text encoding of character-split parts without a BOM"
    ),
) -> None:
    """
    Reassemble the parts of a split in ascending index order.

    Example:
        shellkit join backup_size_part0001.tar -o backup.tar
    """
    from ..chunking import join_chunks
    from ..chunking.sizes import format_size

    try:
        result = join_chunks(first_chunk, output, encoding=encoding)
    except ShellkitError as e:
        _fail(e)
        return

    typer.echo(f"✅ Joined {result.parts} parts -> {result.output} ({format_size(result.size_bytes)})")


@app.command()
def tree(
    root: str = typer.Argument(".", help="Directory to render"),
    exclude: list[str] | None = typer.Option(
        None, "--exclude", "-x", help="Name pattern to skip (repeatable; replaces the defaults)"
    ),
    max_depth: int | None = typer.Option(None, "--max-depth", "-L", help="Levels to descend"),
    show_all: bool = typer.Option(False, "--all", "-a", help="Include hidden entries"),
    dirs_only: bool = typer.Option(False, "--dirs-only", "-d", help="List directories only"),
) -> None:
    """
    Show a directory as an indented tree.

    Example:
        shellkit tree src -L 2
        shellkit tree -x node_modules -x "*.log"
    """
    from ..tree import render_tree

    settings = config_module.SETTINGS
    try:
        report = render_tree(
            root,
            exclude=exclude if exclude else settings.TREE_EXCLUDE,
            max_depth=max_depth if max_depth is not None else settings.TREE_MAX_DEPTH,
            show_hidden=show_all,
            dirs_only=dirs_only,
        )
    except ShellkitError as e:
        _fail(e)
        return

    typer.echo(report.render())


@app.command()
def concat(
    root: str = typer.Argument(".", help="Directory to collect sources from"),
    ext: list[str] | None = typer.Option(
        None, "--ext", "-e", help="File extension to include, e.g. .py (repeatable)"
    ),
    exclude: list[str] | None = typer.Option(
        None, "--exclude", "-x", help="Name pattern to skip (repeatable; replaces the defaults)"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Write to a file instead of stdout"),
) -> None:
    """
    Concatenate source files into one stream, each under a header line.

    Example:
        shellkit concat src -e .py -o all_sources.txt
    """
    from ..concat import concat_sources, resolve_root
    from ..core.errors import InvalidInputError

    settings = config_module.SETTINGS
    extensions = ext if ext else settings.CONCAT_EXTENSIONS
    patterns = exclude if exclude else settings.CONCAT_EXCLUDE
    try:
        root_path = resolve_root(root)
        if output:
            out_path = Path(output).expanduser()
            if not out_path.parent.is_dir():
                raise InvalidInputError(f"Output directory does not exist: {out_path.parent}")
            with out_path.open("w", encoding="utf-8") as out:
                report = concat_sources(
                    root_path,
                    out,
                    extensions=extensions,
                    exclude=patterns,
                    header=settings.CONCAT_HEADER,
                    ignore=[out_path],
                )
            target = str(out_path)
        else:
            report = concat_sources(
                root_path,
                sys.stdout,
                extensions=extensions,
                exclude=patterns,
                header=settings.CONCAT_HEADER,
            )
            target = "stdout"
    except ShellkitError as e:
        _fail(e)
        return
    except OSError as e:
        typer.echo(f"❌ IOError: {e}", err=True)
        raise typer.Exit(1) from e

    typer.echo(
        f"✅ Concatenated {report.files} files ({report.skipped} skipped) -> {target}",
        err=True,
    )


if __name__ == "__main__":
    app()
