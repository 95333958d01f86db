from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import typer
import yaml

from .config import READING_ORDERS, LixConfig, load_config
from .errors import EpubLixError
from .pipeline import analyze_epub

logger = logging.getLogger(__name__)

app = typer.Typer(help="EPUB LIX readability CLI.", no_args_is_help=True)


@app.command()
def analyze(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=True, file_okay=True
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    max_std_dev: float | None = typer.Option(
        None, "--max-std-dev", help="Standard deviation above which outliers are removed."
    ),
    workers: int | None = typer.Option(
        None, "--workers", "-w", help="Parallel workers per book (1 = sequential)."
    ),
    reading_order: str | None = typer.Option(
        None, "--reading-order", help="Order content documents by 'manifest' or 'spine'."
    ),
    chapters_only: bool | None = typer.Option(
        None,
        "--chapters-only/--all-items",
        help="Score only chapter documents when the book has any.",
    ),
    include_failures: bool = typer.Option(
        False, "--include-failures", help="Include per-item failures in the output."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress to stderr."),
) -> None:
    """Analyze an EPUB file (or a directory of EPUBs) and emit JSON."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    cfg = load_config(config)
    _apply_overrides(cfg, max_std_dev, workers, reading_order, chapters_only)

    if input_path.is_file():
        try:
            analysis = analyze_epub(input_path, cfg)
        except EpubLixError as exc:
            raise typer.BadParameter(str(exc), param_hint="--input-path") from exc
        typer.echo(json.dumps(analysis.to_dict(include_failures), indent=2))
        return

    # Directory input: analyze every EPUB below it, reporting failures per file.
    analyses: List[Dict[str, Any]] = []
    for epub_path in sorted(input_path.rglob("*.epub")):
        relative_id = str(epub_path.relative_to(input_path))
        try:
            payload = analyze_epub(epub_path, cfg).to_dict(include_failures)
        except EpubLixError as exc:
            logger.info("Failed to analyze %s: %s", relative_id, exc)
            analyses.append({"file": relative_id, "error": str(exc)})
            continue
        analyses.append({"file": relative_id, **payload})
    typer.echo(json.dumps({"analyses": analyses}, indent=2))


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = LixConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False, allow_unicode=True))


def main() -> None:
    app()


def _apply_overrides(
    config: LixConfig,
    max_std_dev: float | None,
    workers: int | None,
    reading_order: str | None,
    chapters_only: bool | None,
) -> None:
    """Apply CLI overrides to config fields when provided."""
    if max_std_dev is not None:
        config.max_std_dev = max_std_dev
    if workers is not None:
        config.workers = workers
    if reading_order is not None:
        if reading_order not in READING_ORDERS:
            raise typer.BadParameter(
                f"must be one of {', '.join(READING_ORDERS)}", param_hint="--reading-order"
            )
        config.reading_order = reading_order
    if chapters_only is not None:
        config.chapters_only = chapters_only


if __name__ == "__main__":
    main()
