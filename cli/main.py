"""CLI entry point — Typer app for tuberag commands.

Usage:
    python cli/main.py search VIDEO_ID "where is the setup explained?"
    python cli/main.py channel CHANNEL_ID "what gear is recommended?"
    python cli/main.py ask VIDEO_ID "summarize the intro" [--channel]
    python cli/main.py status
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

app = typer.Typer(
    name="tuberag",
    help="tube-rag — hybrid transcript search and chat for videos and channels.",
    no_args_is_help=True,
)

console = Console()

_SETTINGS = typer.Option(None, "--settings", help="Path to settings.yaml")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _results_table(title: str, results, show_video: bool = False) -> Table:
    from tuberag.pipeline.prompts import format_timestamp

    table = Table(title=title)
    table.add_column("#", style="cyan")
    if show_video:
        table.add_column("Video")
    table.add_column("Time")
    table.add_column("Score", justify="right")
    table.add_column("Sim", justify="right")
    table.add_column("Text")

    for i, r in enumerate(results, 1):
        row = [str(i)]
        if show_video:
            row.append(r.video.title if r.video else r.video_id)
        row += [
            f"{format_timestamp(r.start_time)}-{format_timestamp(r.end_time)}",
            f"{r.final_score:.3f}",
            f"{r.similarity:.3f}",
            r.text.strip().replace("\n", " ")[:80],
        ]
        table.add_row(*row)
    return table


@app.command()
def search(
    video_id: str = typer.Argument(..., help="Video to search"),
    query: str = typer.Argument(..., help="Search query"),
    top_k: int = typer.Option(5, "--top-k", "-k", help="Number of chunks"),
    settings_path: Path | None = _SETTINGS,
) -> None:
    """Hybrid search inside one video."""
    from tuberag.builder import build_searcher
    from tuberag.config import load_settings

    searcher = build_searcher(load_settings(settings_path))
    results = searcher.hybrid_chunk_search(video_id, query, top_k=top_k)

    if not results:
        console.print("[yellow]No relevant chunks found.[/]")
        raise typer.Exit(code=1)
    console.print(_results_table(f"Results for '{query}'", results))


@app.command()
def channel(
    channel_id: str = typer.Argument(..., help="Channel to search"),
    query: str = typer.Argument(..., help="Search query"),
    per_video: int | None = typer.Option(None, "--per-video", help="Max chunks per video"),
    total: int | None = typer.Option(None, "--total", help="Max chunks overall"),
    settings_path: Path | None = _SETTINGS,
) -> None:
    """Hybrid search across every video of a channel."""
    from tuberag.builder import build_searcher
    from tuberag.config import load_settings
    from tuberag.retrieval.channel import ChannelSearcher

    settings = load_settings(settings_path)
    searcher = ChannelSearcher(build_searcher(settings), settings=settings.channel)
    results = searcher.hybrid_channel_search(
        channel_id, query, per_video_k=per_video, total_k=total
    )

    if not results:
        console.print("[yellow]No relevant chunks found.[/]")
        raise typer.Exit(code=1)
    console.print(_results_table(f"Channel results for '{query}'", results, show_video=True))


@app.command()
def ask(
    target_id: str = typer.Argument(..., help="Video id (or channel id with --channel)"),
    question: str = typer.Argument(..., help="Question to ask"),
    is_channel: bool = typer.Option(False, "--channel", "-c", help="Ask the whole channel"),
    settings_path: Path | None = _SETTINGS,
) -> None:
    """Ask a question and get a cited answer."""
    from tuberag.builder import build_pipeline
    from tuberag.config import load_settings
    from tuberag.pipeline.citations import format_citations

    pipeline = build_pipeline(load_settings(settings_path))
    if is_channel:
        response = pipeline.ask_channel(target_id, question)
    else:
        response = pipeline.ask_video(target_id, question)

    console.print(f"\n[bold]Q:[/] {response.question}")
    console.print(f"\n[bold green]A:[/] {response.answer}")

    if response.citations:
        console.print(format_citations(response.citations))

    console.print(
        f"\n[dim]Model: {response.model} "
        f"| Chunks: {response.retrieval_count} | Videos: {response.video_count}[/]",
    )


@app.command()
def status(settings_path: Path | None = _SETTINGS) -> None:
    """Show available components and active settings."""
    from tuberag import __version__
    from tuberag.config import load_settings
    from tuberag.embeddings.factory import available_providers as emb_providers
    from tuberag.llm.factory import available_providers as llm_providers
    from tuberag.store.factory import available_blob_stores, available_chunk_stores

    settings = load_settings(settings_path)
    console.print(f"\n[bold green]tube-rag[/] v{__version__}\n")

    table = Table(title="Available Components")
    table.add_column("Layer", style="cyan")
    table.add_column("Available")
    table.add_column("Active")

    table.add_row("Embedding Providers", ", ".join(emb_providers()), settings.embedding.provider)
    table.add_row("Chunk Stores", ", ".join(available_chunk_stores()), settings.chunk_store.backend)
    table.add_row("Blob Stores", ", ".join(available_blob_stores()), settings.blob_store.backend)
    table.add_row("LLM Providers", ", ".join(llm_providers()), settings.llm.provider)

    console.print(table)

    r = settings.retrieval
    c = settings.channel
    console.print(
        f"[dim]top_k={r.top_k} boost={r.hybrid_boost} keyword_base={r.keyword_base_score} "
        f"per_video={c.max_chunks_per_video} total={c.max_total_chunks} "
        f"floor={c.similarity_floor}[/]"
    )


if __name__ == "__main__":
    app()
