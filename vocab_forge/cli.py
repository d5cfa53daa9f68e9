"""Command-line interface for the vocabulary generator."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional, Tuple

import click
import structlog
from pydantic import ValidationError

from .config import DEFAULT_WORD_COUNT, IMAGE_STYLE, MAX_GENERATION_ATTEMPTS
from .errors import Busy, RotationExhausted
from .models import GenerationRequest, ProficiencyLevel
from .pipeline import build_pipeline
from .prompts import IMAGE_STYLE_PROMPTS
from .templates import LEVEL_DESCRIPTIONS, TOPICS
from .utils import load_words_from_file


def configure_logging(verbose: bool = False) -> None:
    if verbose:
        logging.basicConfig(level=logging.INFO)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer() if verbose else structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


configure_logging()

log = structlog.get_logger()


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def main(verbose: bool):
    """Generate vocabulary words for language learners."""
    if verbose:
        configure_logging(verbose=True)


@main.command()
@click.option("-k", "--known", required=True, help="Language the learner already knows (e.g. ru)")
@click.option("-t", "--target", required=True, help="Language being learned (e.g. es)")
@click.option(
    "-l", "--level",
    type=click.Choice([lvl.value for lvl in ProficiencyLevel], case_sensitive=False),
    default=ProficiencyLevel.A1.value,
    help="CEFR proficiency level"
)
@click.option("--topic", default=None, help="Optional topic (e.g. 'animals')")
@click.option("-n", "--count", type=int, default=DEFAULT_WORD_COUNT, help="Number of words to request")
@click.option("-x", "--exclude", multiple=True, help="Word the learner already knows (repeatable)")
@click.option(
    "--exclude-file",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="File with known words (one per line)"
)
@click.option("--images/--no-images", default=False, help="Illustrate each word")
@click.option(
    "--style",
    type=click.Choice(sorted(IMAGE_STYLE_PROMPTS)),
    default=IMAGE_STYLE,
    help="Image style"
)
@click.option("--attempts", type=click.IntRange(min=1), default=MAX_GENERATION_ATTEMPTS,
              help="Total generation attempts, topic rotations included")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
def generate(known: str, target: str, level: str, topic: Optional[str], count: int,
             exclude: Tuple[str, ...], exclude_file: Optional[Path], images: bool,
             style: str, attempts: int, as_json: bool):
    """Generate new words for a language pair."""
    exclusions = list(exclude)
    if exclude_file:
        exclusions.extend(load_words_from_file(exclude_file))

    try:
        request = GenerationRequest(
            known_language=known,
            target_language=target,
            level=level.upper(),
            topic=topic,
            count=count,
            exclusions=exclusions,
        )
    except ValidationError as e:
        raise click.BadParameter(str(e))

    log.info("Starting word generation",
             session_key=request.session_key,
             topic=request.topic,
             count=request.count,
             images=images,
             attempts=attempts)

    pipeline = build_pipeline(max_attempts=attempts, with_images=images)

    async def run():
        result = await pipeline.generate(request)
        image_results = await pipeline.generate_images(result.candidates, style) if images else []
        return result, image_results

    try:
        result, image_results = asyncio.run(run())
    except (Busy, RotationExhausted) as e:
        log.error("Generation failed", error=str(e))
        raise click.ClickException(str(e))

    if as_json:
        payload = {
            "provider": result.provider_used,
            "topic": result.topic,
            "attempts": result.attempts,
            "words": [c.model_dump() for c in result.candidates],
        }
        if images:
            payload["images"] = [i.model_dump(mode="json") for i in image_results]
        click.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    click.echo(f"# {len(result.candidates)} words from {result.provider_used}"
               f" (topic: {result.topic or '-'}, attempts: {result.attempts})")
    for i, candidate in enumerate(result.candidates):
        line = f"{candidate.term} - {candidate.translation}"
        if candidate.gloss:
            line += f" ({candidate.gloss})"
        if images:
            line += f"  {image_results[i].image_url}"
        click.echo(line)


@main.command()
def providers():
    """Show which word providers are configured."""
    pipeline = build_pipeline()
    for name, info in pipeline.provider_status().items():
        if name == "images":
            click.echo(f"images: provider={info['provider'] or 'fallback only'}"
                       f" stock_fallback={'yes' if info['stock_fallback'] else 'no'}")
            continue
        click.echo(f"{name}: priority={info['priority']} enabled={'yes' if info['enabled'] else 'no'}"
                   f" key={'yes' if info['has_key'] else 'no'}"
                   f" available={'yes' if info['available'] else 'no'}")
    click.echo("local: always available (built-in templates)")


@main.command()
def topics():
    """List levels and the topics used for rotation."""
    for level, description in LEVEL_DESCRIPTIONS.items():
        click.echo(f"{level}: {description}")
    click.echo("")
    for topic in TOPICS:
        click.echo(topic)


if __name__ == "__main__":
    main()
