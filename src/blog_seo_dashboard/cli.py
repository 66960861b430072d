"""
Command-line interface for the Blog SEO Dashboard.

Provides commands to analyze content, fetch keyword suggestions, refresh
keywords across a blog export, and inspect Search Console data.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .analysis import InvalidInputError, analyze_content
from .blog_store import BlogStoreError, InMemoryBlogStore, load_blogs, save_blogs
from .bulk_update import BulkUpdater
from .config import AnalyzerConfig, BulkUpdateConfig, SearchConsoleConfig
from .models import AnalysisResult, BulkUpdateProgress
from .search_console import SearchConsoleClient, SearchConsoleError
from .suggestions_client import GoogleSuggestionsClient, SuggestionError

console = Console()


@click.group()
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output.",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """
    Blog SEO Dashboard - keyword research for blog content.

    Examples:

        blog-seo analyze post.txt

        blog-seo suggest "sourdough bread" "starter"

        blog-seo bulk-update blogs.json -o blogs-updated.json
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@main.command()
@click.argument("source", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--max-secondary",
    type=int,
    default=3,
    help="Maximum secondary keywords (default: 3).",
)
@click.option(
    "--limit",
    type=int,
    default=20,
    help="Number of keyword rows to display (default: 20).",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print raw JSON.")
def analyze(source: Path, max_secondary: int, limit: int, as_json: bool) -> None:
    """Analyze a text file for keyword candidates and readability."""
    try:
        text = source.read_text(encoding="utf-8")
        result = analyze_content(text, AnalyzerConfig(max_secondary=max_secondary))
    except InvalidInputError as e:
        console.print(f"[red]Analysis error:[/red] {e}")
        sys.exit(1)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Could not read {source}:[/red] {e}")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    _display_analysis(result, limit)


@main.command()
@click.argument("primary")
@click.argument("secondary")
def suggest(primary: str, secondary: str) -> None:
    """Fetch Google autocomplete suggestions for two seed keywords."""
    client = GoogleSuggestionsClient()
    try:
        with console.status("[bold green]Fetching suggestions..."):
            suggestions = client.fetch_suggestions(primary, secondary)
    except SuggestionError as e:
        console.print(f"[red]Suggestion error:[/red] {e}")
        sys.exit(1)

    table = Table(title="Keyword Suggestions", show_header=True)
    table.add_column("Type", style="cyan")
    table.add_column("Keyword", style="green")
    for kw in suggestions.primary_keywords:
        table.add_row("Primary", kw)
    for kw in suggestions.secondary_keywords:
        table.add_row("Secondary", kw)
    console.print(table)


@main.command("bulk-update")
@click.argument("blogs_json", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Where to write the updated blogs (default: overwrite input).",
)
@click.option("--batch-size", type=int, default=10, help="Blogs per batch (default: 10).")
@click.option("--blog-delay", type=float, default=0.2, help="Seconds between blogs (default: 0.2).")
@click.option("--batch-delay", type=float, default=2.0, help="Seconds between batches (default: 2).")
@click.pass_context
def bulk_update(
    ctx: click.Context,
    blogs_json: Path,
    output: Optional[Path],
    batch_size: int,
    blog_delay: float,
    batch_delay: float,
) -> None:
    """Refresh pending keyword suggestions for every blog in a JSON export."""
    try:
        store = InMemoryBlogStore(load_blogs(blogs_json))
        config = BulkUpdateConfig(
            batch_size=batch_size,
            blog_delay=blog_delay,
            batch_delay=batch_delay,
        )
    except (BlogStoreError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    console.print(Panel.fit(
        "[bold blue]Blog SEO Dashboard[/bold blue]\n"
        f"Refreshing keywords for {len(store)} blogs",
        border_style="blue",
    ))

    def _on_progress(progress: BulkUpdateProgress) -> None:
        if ctx.obj.get("verbose"):
            console.print(f"  {progress.status}")

    updater = BulkUpdater(store, GoogleSuggestionsClient(), config, on_progress=_on_progress)
    try:
        with console.status("[bold green]Updating blogs..."):
            progress = updater.run()
    except KeyboardInterrupt:
        progress = updater.mark_stopped()

    try:
        output_path = save_blogs(store.list_blogs(), output or blogs_json)
    except BlogStoreError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    _display_bulk_summary(progress)
    console.print(f"\n[bold green]Done.[/bold green] Blogs saved to: {output_path}")


@main.command("search-console")
@click.argument("site_url")
@click.option("--client-email", envvar="GOOGLE_CLIENT_EMAIL", help="Service account email.")
@click.option("--private-key", envvar="GOOGLE_PRIVATE_KEY", help="Service account private key.")
@click.option("--limit", type=int, default=25, help="Rows to display (default: 25).")
def search_console(
    site_url: str,
    client_email: Optional[str],
    private_key: Optional[str],
    limit: int,
) -> None:
    """Show top Search Console queries and pages for a site."""
    client = SearchConsoleClient(SearchConsoleConfig(client_email=client_email, private_key=private_key))
    try:
        with console.status("[bold green]Loading Search Console data..."):
            report = client.fetch_keywords(site_url)
    except SearchConsoleError as e:
        console.print(f"[red]Search Console error:[/red] {e}")
        sys.exit(1)

    if not report.keywords:
        console.print("[yellow]No Search Console data available.[/yellow]")
        return

    table = Table(title=f"Search Console ({report.total_rows} rows)", show_header=True)
    table.add_column("Keyword", style="green")
    table.add_column("Page", style="cyan")
    table.add_column("Clicks", justify="right")
    table.add_column("Impressions", justify="right")
    table.add_column("CTR", justify="right")
    table.add_column("Position", justify="right")
    for row in report.keywords[:limit]:
        table.add_row(
            row.keyword,
            row.page,
            str(row.clicks),
            str(row.impressions),
            f"{row.ctr * 100:.2f}%",
            f"{row.position:.1f}",
        )
    console.print(table)


def _display_analysis(result: AnalysisResult, limit: int) -> None:
    """Display analysis results."""
    console.print(
        f"\n[bold]Readability Score[/bold]: {result.readability:.1f} - "
        f"{result.readability_label}"
    )

    kw_table = Table(title="Suggested Keywords", show_header=True)
    kw_table.add_column("Type", style="cyan")
    kw_table.add_column("Keyword", style="green")
    for kw in result.suggestions.primary:
        kw_table.add_row("Primary", kw)
    for kw in result.suggestions.secondary:
        kw_table.add_row("Secondary", kw)
    console.print(kw_table)

    table = Table(title="Keyword Analysis", show_header=True)
    table.add_column("Keyword", style="green")
    table.add_column("Density", justify="right")
    table.add_column("Occurrences", justify="right")
    table.add_column("Relevance", justify="right")
    for candidate in result.keywords[:limit]:
        table.add_row(
            candidate.keyword,
            f"{candidate.density:.2f}%",
            str(candidate.occurrences),
            f"{candidate.relevance:.2f}",
        )
    console.print(table)


def _display_bulk_summary(progress: BulkUpdateProgress) -> None:
    """Display bulk update summary."""
    console.print(f"\n[bold]{progress.status}[/bold]")

    if progress.failed:
        table = Table(title="Failed Blogs", show_header=True)
        table.add_column("Title", style="cyan")
        table.add_column("Error", style="red")
        for item in progress.failed:
            table.add_row(item.title, item.error)
        console.print(table)

    if progress.skipped:
        table = Table(title="Skipped Blogs", show_header=True)
        table.add_column("Title", style="cyan")
        table.add_column("Reason", style="yellow")
        for item in progress.skipped:
            table.add_row(item.title, item.reason)
        console.print(table)


def run_cli() -> None:
    """Entry point for the CLI."""
    main()


if __name__ == "__main__":
    run_cli()
