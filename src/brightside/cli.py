"""CLI interface for brightside."""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import TypeAdapter, ValidationError
from rich.console import Console
from rich.table import Table

from brightside.config import BrightsideConfig, load_config, merge_cli_overrides
from brightside.news.classifier import (
    calculate_positivity_score,
    detect_categories,
    is_from_trusted_domain,
    is_quality_article,
    is_sports_or_entertainment,
)
from brightside.news.models import Article, Category
from brightside.news.reading_time import estimate_reading_time, words_per_minute
from brightside.news.sanitizer import clean_article_content
from brightside.news.sources import aggregate_articles, fetch_article_content, pick_daily_article
from brightside.news.summarizer import summarize_article
from brightside.reading.store import JsonFileStorage, ReadingHistory
from brightside.recommend.engine import RecommendationEngine, get_recommendation_insights

app = typer.Typer(
    name="brightside",
    help="Positive news: classify articles, track reading, and get recommendations.",
    no_args_is_help=True,
)

console = Console()

_ARTICLE_LIST = TypeAdapter(list[Article])


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from brightside import __version__

        console.print(f"brightside {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .brightside.toml file."),
    ] = None,
    data_dir: Annotated[
        Optional[str],
        typer.Option("--data-dir", help="Directory holding the reading history."),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", help="Enable debug logging.")
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Brightside - a calmer news feed."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = merge_cli_overrides(load_config(config_path), data_dir=data_dir)


def _config(ctx: typer.Context) -> BrightsideConfig:
    if isinstance(ctx.obj, BrightsideConfig):
        return ctx.obj
    return load_config()


def _history(ctx: typer.Context) -> ReadingHistory:
    return ReadingHistory(JsonFileStorage(_config(ctx).storage.history_path))


def _load_articles(path: Path) -> list[Article]:
    """Read a JSON list of articles, exiting with an error on bad input."""
    try:
        return _ARTICLE_LIST.validate_json(path.read_bytes())
    except OSError as exc:
        console.print(f"[red]Cannot read {path}: {exc}[/red]")
        raise typer.Exit(1) from exc
    except ValidationError as exc:
        console.print(f"[red]Invalid article file {path}: {exc.error_count()} error(s)[/red]")
        raise typer.Exit(1) from exc


def _read_text(path: Path) -> str:
    if str(path) == "-":
        return sys.stdin.read()
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        console.print(f"[red]Cannot read {path}: {exc}[/red]")
        raise typer.Exit(1) from exc


@app.command()
def track(
    ctx: typer.Context,
    article_id: Annotated[str, typer.Argument(help="Stable article id (usually its URL).")],
    title: Annotated[str, typer.Option("--title", "-t")] = "",
    source: Annotated[str, typer.Option("--source", "-s")] = "",
    category: Annotated[
        Optional[list[Category]],
        typer.Option("--category", help="Article category; repeat for several."),
    ] = None,
) -> None:
    """Record that an article was read today."""
    result = _history(ctx).track_article_read(article_id, title, source, category or [])
    if result.error:
        console.print(f"[red]{result.error}[/red]")
        raise typer.Exit(1)
    if result.created:
        console.print(f"Tracked [bold]{article_id}[/bold]")
    else:
        console.print(f"Already tracked today: {article_id}")


@app.command()
def history(
    ctx: typer.Context,
    limit: Annotated[int, typer.Option("--limit", "-n", help="Entries to show.")] = 20,
) -> None:
    """Show the most recent reads."""
    loaded = _history(ctx).load()
    if loaded.error:
        console.print(f"[yellow]{loaded.error}[/yellow]")
    if not loaded.entries:
        console.print("No reading history yet.")
        return

    table = Table(title="Reading history")
    table.add_column("Date")
    table.add_column("Title")
    table.add_column("Source")
    table.add_column("Categories")
    for entry in loaded.entries[:limit]:
        table.add_row(
            entry.date,
            entry.title or entry.article_id,
            entry.source,
            ", ".join(entry.categories),
        )
    console.print(table)


@app.command()
def calendar(
    ctx: typer.Context,
    days: Annotated[Optional[int], typer.Option("--days", "-d")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print JSON.")] = False,
) -> None:
    """Reads per day over the trailing window."""
    window = days if days is not None else _config(ctx).insights.calendar_days
    counts = _history(ctx).get_reading_calendar(window)
    if as_json:
        console.print_json(json.dumps(counts))
        return
    for day, count in counts.items():
        console.print(f"{day}  {'#' * count}{' ' if count else ''}{count}")


@app.command()
def stats(
    ctx: typer.Context,
    as_json: Annotated[bool, typer.Option("--json", help="Print JSON.")] = False,
) -> None:
    """Show streaks, badges and favourite categories."""
    summary = _history(ctx).get_reading_stats()
    if as_json:
        console.print_json(summary.model_dump_json())
        return

    console.print(f"Total read: [bold]{summary.total_articles_read}[/bold]")
    console.print(
        f"Streak: {summary.current_streak} day(s) (longest {summary.longest_streak})"
    )
    console.print(
        f"This week: {summary.articles_this_week}  This month: {summary.articles_this_month}"
    )
    if summary.top_categories:
        top = ", ".join(f"{c.category} ({c.count})" for c in summary.top_categories)
        console.print(f"Top categories: {top}")
    earned = summary.earned_badges
    if earned:
        console.print("Badges: " + ", ".join(b.name for b in earned))


@app.command()
def recommend(
    ctx: typer.Context,
    articles_file: Annotated[
        Path, typer.Argument(help="JSON list of candidate articles.")
    ],
    limit: Annotated[Optional[int], typer.Option("--limit", "-n")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print JSON.")] = False,
) -> None:
    """Rank candidate articles against your reading history."""
    candidates = _load_articles(articles_file)
    count = limit if limit is not None else _config(ctx).recommendations.limit
    recommendations = RecommendationEngine(_history(ctx)).recommend(candidates, count)

    if as_json:
        payload = {
            "recommendations": [r.model_dump(mode="json") for r in recommendations],
            "insights": get_recommendation_insights(recommendations).model_dump(mode="json"),
        }
        console.print_json(json.dumps(payload))
        return

    if not recommendations:
        console.print("Nothing new to recommend.")
        return

    table = Table(title="Recommended for you")
    table.add_column("Score", justify="right")
    table.add_column("Title")
    table.add_column("Why")
    for rec in recommendations:
        table.add_row(f"{rec.score:.1f}", rec.article.title, "; ".join(rec.reasons))
    console.print(table)


@app.command()
def clean(
    path: Annotated[Path, typer.Argument(help="Raw article text file, or - for stdin.")],
) -> None:
    """Strip scraper boilerplate from article text."""
    typer.echo(clean_article_content(_read_text(path)))


@app.command()
def classify(
    title: Annotated[str, typer.Option("--title", "-t")],
    url: Annotated[str, typer.Option("--url", "-u")] = "",
    description: Annotated[str, typer.Option("--description", "-d")] = "",
) -> None:
    """Show how the keyword rules see an article."""
    text = f"{title} {description}"
    console.print(f"Positivity: {calculate_positivity_score(text)}")
    console.print(f"Categories: {', '.join(detect_categories(title, description))}")
    console.print(f"Trusted domain: {is_from_trusted_domain(url)}")
    console.print(f"Sports/entertainment: {is_sports_or_entertainment(text)}")
    console.print(f"Quality article: {is_quality_article(title, description, url)}")


@app.command()
def fetch(
    ctx: typer.Context,
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Write articles as JSON here.")
    ] = None,
) -> None:
    """Fetch quality articles from every configured provider."""
    news = _config(ctx).news
    if not news.is_configured:
        console.print("[yellow]No news API keys configured.[/yellow]")
    articles = aggregate_articles(
        newsapi_key=news.newsapi_key,
        guardian_api_key=news.guardian_api_key,
        nyt_api_key=news.nyt_api_key,
        timeout=news.fetch_timeout,
    )
    data = _ARTICLE_LIST.dump_json(articles, indent=2).decode("utf-8")
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(data, encoding="utf-8")
        console.print(f"Wrote {len(articles)} articles to {output}")
    else:
        typer.echo(data)


@app.command()
def daily(
    ctx: typer.Context,
    articles_file: Annotated[
        Optional[Path],
        typer.Option("--articles", "-a", help="JSON list of articles instead of fetching."),
    ] = None,
    skip: Annotated[int, typer.Option("--skip", help="Show the Nth next pick.")] = 0,
    content: Annotated[bool, typer.Option("--content", help="Fetch and clean the full text.")] = False,
) -> None:
    """Show today's most positive article."""
    cfg = _config(ctx)
    if articles_file is not None:
        articles = _load_articles(articles_file)
    else:
        articles = aggregate_articles(
            newsapi_key=cfg.news.newsapi_key,
            guardian_api_key=cfg.news.guardian_api_key,
            nyt_api_key=cfg.news.nyt_api_key,
            timeout=cfg.news.fetch_timeout,
        )

    article = pick_daily_article(articles, skip)
    if article is None:
        console.print("[red]No articles found.[/red]")
        raise typer.Exit(1)

    console.print(f"[bold]{article.title}[/bold]")
    console.print(f"{article.source} - {article.url}")
    if article.description:
        console.print(article.description)

    if content:
        fetched = fetch_article_content(
            article.url, reader_url=cfg.news.reader_url, timeout=cfg.news.fetch_timeout
        )
        if not fetched.success:
            console.print(f"[yellow]{fetched.error}[/yellow]")
            return
        body = clean_article_content(fetched.content)
        minutes = estimate_reading_time(body, words_per_minute(cfg.reading.reading_speed))
        console.print(f"\n[dim]{minutes} min read[/dim]\n")
        typer.echo(body)


@app.command()
def summarize(
    ctx: typer.Context,
    url: Annotated[str, typer.Argument(help="Article URL.")],
    title: Annotated[str, typer.Option("--title", "-t")],
) -> None:
    """Fetch an article and print a short summary."""
    cfg = _config(ctx)
    fetched = fetch_article_content(
        url, reader_url=cfg.news.reader_url, timeout=cfg.news.fetch_timeout
    )
    if not fetched.success:
        console.print(f"[red]{fetched.error}[/red]")
        raise typer.Exit(1)

    summary = summarize_article(
        fetched.content,
        title,
        model=cfg.summary.model,
        timeout=cfg.summary.timeout,
        min_chars=cfg.summary.min_chars,
        max_chars=cfg.summary.max_chars,
    )
    if not summary:
        console.print("[yellow]Summary not available.[/yellow]")
        raise typer.Exit(1)
    typer.echo(summary)
