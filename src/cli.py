"""
Command-line interface for socialtrend.

Provides commands to run the API server, fetch trends, draft posts and
run diagnostic checks.

Usage:
    socialtrend serve                         # Run the API server
    socialtrend trends -p reddit,hackernews   # Print current trends
    socialtrend generate -n "Acme" -t casual  # Draft posts from live trends
    socialtrend health                        # Check configuration and sources
"""

import asyncio
import json
import sys

import click

from src.config.settings import Settings, get_settings
from src.observability.logging import setup_logging
from src.observability.metrics import get_metrics


def _split_platforms(value: str | None) -> list[str] | None:
    if not value:
        return None
    return [p.strip() for p in value.split(",") if p.strip()]


def _settings_for(enrich: bool) -> Settings:
    settings = get_settings()
    if not enrich:
        settings = settings.model_copy(update={"enrichment_enabled": False})
    return settings


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool) -> None:
    """Socialtrend - Trending topics to ready-to-post social content."""
    if debug:
        import os
        os.environ["LOG_LEVEL"] = "DEBUG"
        get_settings.cache_clear()

    setup_logging()


@main.command()
@click.option("--host", default=None, help="API server host")
@click.option("--port", default=None, type=int, help="API server port")
@click.option("--reload", is_flag=True, help="Enable auto-reload (dev only)")
@click.option("--metrics/--no-metrics", default=True, help="Enable metrics server")
@click.option("--metrics-port", default=None, type=int, help="Metrics server port")
def serve(
    host: str | None,
    port: int | None,
    reload: bool,
    metrics: bool,
    metrics_port: int | None,
) -> None:
    """Start the API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port
    metrics_port = metrics_port or settings.metrics_port

    if metrics:
        get_metrics().start_server(port=metrics_port)
        click.echo(f"Metrics available on http://localhost:{metrics_port}/metrics")

    click.echo(f"Starting API server on {host}:{port}")
    click.echo(f"API docs available on http://localhost:{port}/docs")

    uvicorn.run(
        "src.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )


@main.command()
@click.option("--platforms", "-p", default=None, help="Comma-separated sources (default reddit,hackernews)")
@click.option("--enrich/--no-enrich", default=True, help="Annotate hashtags with AI context")
@click.option("--as-json", is_flag=True, help="Print the raw snapshot as JSON")
def trends(platforms: str | None, enrich: bool, as_json: bool) -> None:
    """Fetch and print current trends."""
    from src.enrichment.errors import ConfigurationError
    from src.trends.errors import TrendFetchError
    from src.trends.service import TrendService

    async def run():
        service = TrendService.from_settings(_settings_for(enrich))
        return await service.get_trends(_split_platforms(platforms))

    try:
        snapshot = asyncio.run(run())
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--platforms")
    except (ConfigurationError, TrendFetchError) as e:
        click.echo(click.style(f"Trend analysis failed: {e}", fg="red"), err=True)
        sys.exit(1)

    if as_json:
        click.echo(snapshot.model_dump_json(by_alias=True, indent=2))
        return

    click.echo(f"\nTrends from {', '.join(p.value for p in snapshot.sources)}")
    click.echo("-" * 60)
    for hashtag in snapshot.hashtags:
        click.echo(
            f"  #{hashtag.tag:<20} {hashtag.engagement:>8}  "
            f"{hashtag.platform.value:<10} {hashtag.category}"
        )
        if hashtag.context:
            click.echo(f"      {hashtag.context}")
    click.echo("-" * 60)
    for theme in snapshot.themes:
        click.echo(f"  {theme.name:<20} weight={theme.weight:.2f}")
    click.echo(f"\nTotal engagement: {snapshot.total_engagement}")


@main.command()
@click.option("--business-name", "-n", required=True, help="Business name")
@click.option("--business-type", "-b", default="other", help="Business type, e.g. 'coffee shop'")
@click.option("--tone", "-t", required=True, help="professional, casual, quirky, humorous, ...")
@click.option("--platforms", "-p", default=None, help="Trend sources to draw from")
@click.option("--enrich/--no-enrich", default=False, help="Annotate hashtags before drafting")
@click.option("--as-json", is_flag=True, help="Print messages as JSON")
def generate(
    business_name: str,
    business_type: str,
    tone: str,
    platforms: str | None,
    enrich: bool,
    as_json: bool,
) -> None:
    """Draft posts for every platform from live trends."""
    from src.enrichment.errors import ConfigurationError
    from src.messaging.errors import MessageGenerationError
    from src.messaging.schemas import BusinessProfile, SelectedTrends
    from src.messaging.service import MessageService
    from src.trends.errors import TrendFetchError
    from src.trends.service import TrendService

    async def run():
        settings = _settings_for(enrich)
        snapshot = await TrendService.from_settings(settings).get_trends(
            _split_platforms(platforms)
        )
        business = BusinessProfile(name=business_name, type=business_type, tone=tone)
        selected = SelectedTrends(hashtags=snapshot.hashtags, themes=snapshot.themes)
        return await MessageService.from_settings(settings).generate(business, selected)

    try:
        messages = asyncio.run(run())
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--platforms")
    except (ConfigurationError, TrendFetchError, MessageGenerationError) as e:
        click.echo(click.style(f"Generation failed: {e}", fg="red"), err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps([m.model_dump(mode="json", by_alias=True) for m in messages], indent=2))
        return

    for message in messages:
        click.echo(click.style(f"\n{message.platform.value}", bold=True))
        click.echo("-" * 40)
        click.echo(message.content)
        click.echo(
            f"[theme={message.theme}, engagement={message.engagement_potential}, "
            f"model={message.model}, hashtags={', '.join(message.hashtags)}]"
        )


@main.command()
@click.option("--check-sources", is_flag=True, help="Also fetch each source once (no AI)")
def health(check_sources: bool) -> None:
    """Check configuration and, optionally, source reachability."""
    import structlog
    logger = structlog.get_logger()

    settings = get_settings()
    results: dict[str, bool] = {
        "ai_configured": settings.ai_configured,
        "youtube_configured": settings.youtube_configured,
    }

    async def check():
        from src.trends.service import build_adapters

        adapters = build_adapters(_settings_for(False))
        for platform, adapter in adapters.items():
            try:
                await adapter.fetch_trends()
                results[f"{platform.value}_reachable"] = True
            except Exception as e:
                results[f"{platform.value}_reachable"] = False
                logger.error("Source check failed", platform=platform.value, error=str(e))

    if check_sources:
        asyncio.run(check())

    click.echo("\nHealth Check Results:")
    click.echo("-" * 40)

    all_healthy = True
    for name, status in results.items():
        icon = "✓" if status else "✗"
        color = "green" if status else "red"
        click.echo(click.style(f"  {icon} {name}: {status}", fg=color))
        if name.endswith("_reachable") and not status:
            all_healthy = False

    click.echo("-" * 40)

    if all_healthy:
        click.echo(click.style("All checked sources healthy!", fg="green"))
        sys.exit(0)
    else:
        click.echo(click.style("Some sources unreachable!", fg="red"))
        sys.exit(1)


if __name__ == "__main__":
    main()
