import click

from insolentbard.exporters import list_exporters

MAX_INSULTS = 500
MIN_INSULTS = 1


def _load(ctx, phrases_path):
    """Load phrases, turning loader failures into a clean CLI error."""
    from insolentbard.errors import InsultError
    from insolentbard.phrases import load_phrases

    try:
        return load_phrases(phrases_path)
    except InsultError as e:
        ctx.obj["logger"].debug("Loading phrases failed: %s", e)
        raise click.ClickException(str(e)) from e


def _resolve_count(value) -> int:
    """Validate a count that may have come from a preset rather than the command line."""
    try:
        count = int(value)
    except (TypeError, ValueError):
        raise click.BadParameter(f"Expected an integer count, got '{value}'.", param_hint="'--count'")
    if not MIN_INSULTS <= count <= MAX_INSULTS:
        raise click.BadParameter(
            f"{count} is not in the range {MIN_INSULTS}<=x<={MAX_INSULTS}.", param_hint="'--count'"
        )
    return count


class _MutuallyExclusiveOption(click.Option):
    """Click option that is mutually exclusive with another option."""

    def __init__(self, *args, **kwargs):
        self.mutually_exclusive = set(kwargs.pop("mutually_exclusive", []))
        super().__init__(*args, **kwargs)

    def handle_parse_result(self, ctx, opts, args):
        for name in self.mutually_exclusive:
            if name in opts and self.name in opts:
                raise click.UsageError(
                    f"--{self.name} and --{name} are mutually exclusive."
                )
        return super().handle_parse_result(ctx, opts, args)


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Show debug output.", cls=_MutuallyExclusiveOption, mutually_exclusive=["quiet"])
@click.option("--quiet", "-q", is_flag=True, default=False, help="Suppress all output except insults and errors.", cls=_MutuallyExclusiveOption, mutually_exclusive=["verbose"])
@click.option("--log-file", default=None, type=click.Path(), help="Write structured log to file.")
@click.pass_context
def cli(ctx, verbose, quiet, log_file):
    """A Shakespearean insult generator.

    Insults are built from adjective/adjective/noun triples. The default
    phrases ship with the package, so no external files are needed.
    """
    from insolentbard.ui import Console
    from insolentbard.logging_config import setup_logging

    ctx.ensure_object(dict)
    ctx.obj["console"] = Console(quiet=quiet, verbose=verbose)
    ctx.obj["logger"] = setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)


@cli.command()
@click.option("--count", "-c", default=None, type=click.IntRange(MIN_INSULTS, MAX_INSULTS), help="Number of insults to generate (default 1).")
@click.option("--phrases", "-p", "phrases_path", default=None, help="Path to a tab-delimited phrases file. Defaults to the built-in list.")
@click.option("--genfile", "-g", default=None, type=click.Path(dir_okay=False), help="Write every insult as JSON to GENFILE instead of printing.")
@click.option("--strategy", "-s", default=None, type=click.Choice(list_exporters()), help="Export strategy for --genfile (default cartesian).")
@click.option("--preset", default=None, help="Load settings from a named preset (e.g. tirade, archive).")
@click.pass_context
def insult(ctx, count, phrases_path, genfile, strategy, preset):
    """Print random insults, or export them all with --genfile."""
    from insolentbard.config import merge_config
    from insolentbard.errors import InsultError
    from insolentbard.exporters import DEFAULT_EXPORTER
    from insolentbard.generator import emit_all, emit_random

    # Apply preset config, CLI flags override
    cfg = {}
    if preset:
        from insolentbard.config import load_preset
        try:
            cfg = load_preset(preset)
        except FileNotFoundError as e:
            raise click.BadParameter(str(e), param_hint="'--preset'")
    cfg = merge_config(cfg, {"count": count, "phrases": phrases_path, "strategy": strategy})
    count = _resolve_count(cfg.get("count", MIN_INSULTS))
    strategy = cfg.get("strategy", DEFAULT_EXPORTER)
    # A preset can still name a strategy the --strategy choice would reject
    if strategy not in list_exporters():
        raise click.BadParameter(
            f"Unknown strategy '{strategy}'. Available: {', '.join(list_exporters())}",
            param_hint="'--strategy'",
        )

    console = ctx.obj["console"]
    logger = ctx.obj["logger"]
    phrases = _load(ctx, cfg.get("phrases"))
    console.debug(f"Loaded {len(phrases)} phrases")

    if genfile:
        try:
            used = emit_all(phrases, genfile, strategy=strategy)
        except InsultError as e:
            logger.debug("Export to %s failed: %s", genfile, e)
            raise click.ClickException(str(e)) from e
        logger.info("Exported %d phrases to %s (%s)", used, genfile, strategy)
        console.info(f"Generated {used} phrases to {genfile}")
    else:
        emit_random(phrases, count)


@cli.command()
@click.option("--phrases", "-p", "phrases_path", default=None, help="Path to a tab-delimited phrases file.")
@click.pass_context
def hourly(ctx, phrases_path):
    """Print the insult of the hour."""
    from insolentbard.generator import insult_of_the_hour

    phrases = _load(ctx, phrases_path)
    click.echo(insult_of_the_hour(phrases))


@cli.command()
@click.argument("adjective1")
@click.argument("adjective2")
@click.argument("noun")
@click.option("--phrases", "-p", "phrases_path", default=None, help="Path to a tab-delimited phrases file.")
@click.pass_context
def mix(ctx, adjective1, adjective2, noun, phrases_path):
    """Compose your own insult from known words."""
    from insolentbard.errors import UnknownWord
    from insolentbard.generator import compose_insult

    phrases = _load(ctx, phrases_path)
    try:
        click.echo(compose_insult(phrases, adjective1, adjective2, noun))
    except UnknownWord as e:
        raise click.ClickException(f"{e} Run 'insolentbard words' to see the choices.") from e


@cli.command()
@click.argument("query")
@click.option("--limit", "-l", default=20, type=click.IntRange(min=1), help="Maximum number of matches to show.")
@click.option("--phrases", "-p", "phrases_path", default=None, help="Path to a tab-delimited phrases file.")
@click.pass_context
def search(ctx, query, limit, phrases_path):
    """Find insults containing QUERY among every combination."""
    from insolentbard.generator import search_insults

    console = ctx.obj["console"]
    phrases = _load(ctx, phrases_path)
    try:
        matches = search_insults(phrases, query, limit=limit)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="'QUERY'")
    if not matches:
        console.info(f"No insults match '{query}'.")
        return
    for match in matches:
        click.echo(f"{match.id}: {match.insult}")


@cli.command()
@click.option("--column", type=click.Choice(["adjective1", "adjective2", "noun"]), default=None, help="Only list this column.")
@click.option("--phrases", "-p", "phrases_path", default=None, help="Path to a tab-delimited phrases file.")
@click.pass_context
def words(ctx, column, phrases_path):
    """List the words available for each position."""
    from insolentbard.phrases import vocabulary

    columns = vocabulary(_load(ctx, phrases_path))
    if column:
        for word in columns[column]:
            click.echo(word)
        return
    for name, column_words in columns.items():
        click.echo(f"{name}: {', '.join(column_words)}")


@cli.command()
def presets():
    """List available presets."""
    from insolentbard.config import list_presets

    for name in list_presets():
        click.echo(name)


if __name__ == "__main__":
    cli()
