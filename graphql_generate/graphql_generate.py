import logging
import sys
from pathlib import Path

import click

from .cli_utils import format_error_tree
from .pipeline import GenerateError, GenerateFlags, generate, load_config

DEFAULT_CONFIG = ".graphqlrc.json"


@click.command()
@click.option("--backend", is_flag=True, default=False, help="Generate the schema file and resolvers (default)")
@click.option("--client", is_flag=True, default=False, help="Generate client fragments, queries, mutations and subscriptions")
@click.option("--db", is_flag=True, default=False, help="Migrate the configured database to the model")
@click.option(
    "--config",
    "-c",
    default=DEFAULT_CONFIG,
    type=click.Path(dir_okay=False, resolve_path=True),
    help="JSON config file; its directory is the project root",
)
@click.option("--verbose", "-v", is_flag=True, default=False)
def graphql_generate(backend, client, db, config, verbose):
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config_path = Path(config)
    try:
        generate_config = load_config(config_path)
        outcomes = generate(GenerateFlags(backend=backend, client=client, db=db), generate_config, config_path.parent)
    except GenerateError as e:
        click.echo(format_error_tree(e), err=True)
        sys.exit(1)

    for outcome in outcomes:
        if outcome.pipeline == "db":
            click.echo("db: database migrated")
        else:
            click.echo(f"{outcome.pipeline}: {len(outcome.written)} file(s) written")
