"""CLI entry point: python -m pageslides INPUT [options]"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table

from pageslides.document import parse_document
from pageslides.items import ExtractionResult, SourceType
from pageslides.profiles import load_profile
from pageslides.query import extract_and_save
from pageslides.settings import (
    DEFAULT_OUTPUT_DIR,
    LOG_FORMAT,
    LOG_LEVEL,
    SLIDES_JSON_NAME,
    SLIDES_MARKDOWN_NAME,
)
from pageslides.sources import detect_source
from pageslides.storage import JsonSlideStore, MemorySlideStore

logger = logging.getLogger(__name__)

_SOURCE_CHOICES = [
    SourceType.NOTION.value,
    SourceType.MARKDOWN.value,
    SourceType.RENDERED_MARKDOWN.value,
    SourceType.RAW_MARKDOWN.value,
]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pageslides",
        description=(
            "Turn a saved Notion page, rendered Markdown page or Markdown file\n"
            "into presentation slides (JSON and Markdown)."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", metavar="INPUT",
                        help="HTML or Markdown file to extract slides from")
    parser.add_argument("--url", default="", metavar="URL",
                        help="Original page URL (default: file:// URI of INPUT)")
    parser.add_argument("--source", default=None, choices=_SOURCE_CHOICES,
                        metavar="{" + ",".join(_SOURCE_CHOICES) + "}",
                        help="Skip detection and use this source type")
    parser.add_argument("--profile", default=None, metavar="FILE",
                        help="YAML extraction profile")
    parser.add_argument("--out", default=DEFAULT_OUTPUT_DIR, metavar="DIR",
                        help=f"Output directory (default: {DEFAULT_OUTPUT_DIR})")
    parser.add_argument("--format", default="both", choices=["both", "json", "markdown"],
                        metavar="{both,json,markdown}",
                        help="Which output files to write (default: both)")
    parser.add_argument("--log-level", default=LOG_LEVEL,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help=f"Logging level (default: {LOG_LEVEL})")
    return parser


def _print_banner(console: Console, args: argparse.Namespace, url: str) -> None:
    console.print(
        Panel.fit(
            f"[bold cyan]pageslides[/bold cyan]\n"
            f"Input:    [green]{args.input}[/green]\n"
            f"URL:      {url}\n"
            f"Source:   {args.source or 'auto'}\n"
            f"Profile:  {args.profile or '-'}\n"
            f"Output:   [yellow]{args.out}[/yellow] ({args.format})",
            border_style="cyan",
            title="[bold]Configuration[/bold]",
        ),
    )


def _print_summary(console: Console, result: ExtractionResult, out_dir: Path) -> None:
    console.print()
    console.print(Rule("[bold cyan]Extraction Summary[/bold cyan]"))
    source = result.source_type.value if result.source_type else "-"
    console.print(f"  [bold]Source type      :[/bold] {source}")
    console.print(f"  [bold]Slides extracted :[/bold] [green]{len(result.slides)}[/green]")
    console.print(f"  [bold]Output directory :[/bold] [green]{out_dir}[/green]")
    console.print()

    if not result.slides:
        return
    tbl = Table(
        title=f"[bold green]Slides ({len(result.slides)})[/bold green]",
        box=box.SIMPLE_HEAVY,
        show_lines=False,
    )
    tbl.add_column("#",         style="dim",  justify="right", width=4, no_wrap=True)
    tbl.add_column("Title",     style="cyan", max_width=48,             no_wrap=True)
    tbl.add_column("Subslides", justify="right", width=9,               no_wrap=True)
    tbl.add_column("Words",     justify="right", width=7,               no_wrap=True)
    for i, slide in enumerate(result.slides, 1):
        words = len(slide.content.split()) + sum(len(s.content.split()) for s in slide.subslides)
        tbl.add_row(str(i), slide.title[:45], str(len(slide.subslides)), str(words))
    console.print(tbl)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)
    console = Console()

    input_path = Path(args.input)
    if not input_path.is_file():
        console.print(f"[red]ERROR:[/red] input file not found: {input_path}")
        return 1
    url = args.url or input_path.resolve().as_uri()
    _print_banner(console, args, url)

    text = input_path.read_text(encoding="utf-8", errors="replace")
    document = parse_document(text)
    source_type = SourceType(args.source) if args.source else detect_source(document, url)

    policy = None
    if args.profile:
        try:
            policy = load_profile(args.profile, url, source_type)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            console.print(f"[red]ERROR:[/red] could not load profile {args.profile}: {exc}")
            return 1

    out_dir = Path(args.out).resolve()
    if args.format in ("both", "json"):
        store = JsonSlideStore(out_dir / SLIDES_JSON_NAME)
    else:
        store = MemorySlideStore()

    result = extract_and_save(document, url, store=store, source_type=source_type, policy=policy)
    if not result.ok:
        console.print(f"[red]ERROR:[/red] {result.error}")
        return 1

    if args.format in ("both", "markdown") and result.slides:
        md_path = out_dir / SLIDES_MARKDOWN_NAME
        md_path.parent.mkdir(parents=True, exist_ok=True)
        md_path.write_text(result.to_presentation().to_markdown(), encoding="utf-8")
        logger.info("Wrote %s", md_path)

    _print_summary(console, result, out_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())
