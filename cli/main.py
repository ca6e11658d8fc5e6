"""tiksaver CLI — entry-point for downloads and the HTTP endpoint.

Usage:
    python cli/main.py --help

Commands:
    download  → save one or more posts to the media directories
    info      → print the direct play URL of a video post
    serve     → run the HTTP endpoint under uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from tiksaver.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working
# directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import List, Optional

import httpx
import typer

from tiksaver.config import settings
from tiksaver.logging_config import configure_logging
from tiksaver.downloader import download_urls, get_info
from tiksaver.scraper.errors import ExtractionError

app = typer.Typer(
    name="tiksaver",
    help="Save public TikTok videos and photo posts.",
    no_args_is_help=True,
)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, help="Log level (default from settings)."),
) -> None:
    """Save public TikTok videos and photo posts."""
    configure_logging(log_level)


@app.command("download")
def download(
    urls: List[str] = typer.Argument(..., help="Post URLs (video, photo or share link)."),
    video_dir: Optional[Path] = typer.Option(None, help="Override the video output directory."),
    image_dir: Optional[Path] = typer.Option(None, help="Override the image output directory."),
) -> None:
    """Download each post and print one line per saved file."""
    if video_dir is not None:
        settings.video_dir = video_dir
    if image_dir is not None:
        settings.image_dir = image_dir

    typer.echo(f"[download] Processing {len(urls)} URL(s) …")
    results = download_urls(urls)
    if not results:
        typer.echo("[download] Nothing was downloaded.")
        raise typer.Exit(1)

    for r in results:
        folder = settings.video_dir if r.type == "video" else settings.image_dir
        typer.echo(f"  ✅ [{r.type}] {folder / r.filename}")
    typer.echo(f"[download] Saved {len(results)} file(s).")


@app.command("info")
def info(
    url: str = typer.Argument(..., help="Video post URL."),
) -> None:
    """Print the direct play URL embedded in a video post page."""
    try:
        play_url = get_info(url)
    except (ExtractionError, httpx.HTTPError) as exc:
        typer.echo(f"[info] {exc}", err=True)
        raise typer.Exit(1)
    typer.echo(play_url)


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default from settings)."),
    port: Optional[int] = typer.Option(None, help="Port (default from settings)."),
) -> None:
    """Run the download endpoint."""
    import uvicorn

    bind_host = host or settings.host
    bind_port = port or settings.port
    typer.echo(f"[serve] Server running at http://{bind_host}:{bind_port}/")
    uvicorn.run("tiksaver.api.app:app", host=bind_host, port=bind_port)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
