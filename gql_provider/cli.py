"""Command-line interface for gql-provider."""

import asyncio
import logging
from pathlib import Path

import click

from . import __version__
from .core.auth import Auth, BearerAuth, HeaderAuth, NoAuth
from .core.errors import CompilationError
from .core.executor import QueryExecutor
from .core.generator import CodeGenerator
from .core.ir import TypeKind
from .core.provider import GraphQLProvider
from .core.validator import QueryValidator


def build_auth(bearer: str | None, headers: tuple[str, ...]) -> Auth:
    """Pick the auth handler from the command-line options."""
    if bearer and headers:
        raise click.UsageError("Use either --bearer or --header, not both.")
    if bearer:
        return BearerAuth(bearer)
    if headers:
        try:
            return HeaderAuth.from_pairs(list(headers))
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--header")
    return NoAuth()


def connection_options(func):
    """Options shared by every command that talks to a service."""
    func = click.option(
        "--timeout",
        type=float,
        default=30.0,
        show_default=True,
        help="Request timeout in seconds.",
    )(func)
    func = click.option(
        "--header",
        "headers",
        multiple=True,
        help="Extra request header as Name:Value (repeatable).",
    )(func)
    func = click.option("--bearer", help="Bearer token for the Authorization header.")(func)
    func = click.option(
        "--verbose",
        "-v",
        is_flag=True,
        help="Enable verbose output.",
    )(func)
    return func


def _run(coro):
    """Run a coroutine, turning fatal generation errors into CLI errors."""
    try:
        return asyncio.run(coro)
    except CompilationError as e:
        raise click.ClickException(str(e))


@click.group()
@click.version_option(version=__version__)
def main():
    """Compile GraphQL service types and validate queries against them."""
    pass


@main.command("types")
@click.argument("url")
@click.option(
    "--schema-file",
    type=click.Path(exists=True, dir_okay=False),
    help="Saved introspection response to use instead of fetching.",
)
@connection_options
def types_command(url, schema_file, verbose, bearer, headers, timeout):
    """Fetch and compile the schema of URL, then summarize it.

    Examples:

        gql-provider types https://api.example.com/graphql

        gql-provider types https://api.example.com/graphql -v --bearer TOKEN
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    auth = build_auth(bearer, headers)

    click.echo(f"Compiling schema of {url}...")
    provider = _run(
        GraphQLProvider.create(url, auth, timeout=timeout, schema_file=schema_file)
    )
    registry = provider.registry

    for kind in (
        TypeKind.OBJECT,
        TypeKind.INTERFACE,
        TypeKind.UNION,
        TypeKind.ENUM,
        TypeKind.INPUT_OBJECT,
        TypeKind.SCALAR,
    ):
        click.echo(f"  {kind.value.title().replace('_', ' ')}s: {len(registry.by_kind(kind))}")

    if verbose:
        for compiled in registry.generated():
            click.echo(f"{compiled.kind.value} {compiled.name}")
            for field in compiled.fields:
                click.echo(f"    {field.name}: {field.type}")

    click.echo(f"Done! {len(registry.generated())} types compiled.")


@main.command()
@click.argument("url")
@click.option("--query", "-q", help="Query text to validate.")
@click.option(
    "--query-file",
    "-f",
    type=click.Path(exists=True, dir_okay=False),
    help="File holding the query text.",
)
@connection_options
def check(url, query, query_file, verbose, bearer, headers, timeout):
    """Preflight a query against URL without compiling the schema.

    Examples:

        gql-provider check https://api.example.com/graphql -q "{ me { name } }"

        gql-provider check https://api.example.com/graphql -f ./queries/me.graphql
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    if bool(query) == bool(query_file):
        raise click.UsageError("Pass exactly one of --query or --query-file.")
    if query_file:
        query = Path(query_file).read_text()

    executor = QueryExecutor(url, build_auth(bearer, headers), timeout=timeout)
    bound = _run(QueryValidator(executor).validate(query))
    click.echo(f"OK: query {bound.name or '<anonymous>'} accepted by {url}")


@main.command()
@click.argument("url")
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(),
    help="Output file for the generated models (e.g., models.py).",
)
@click.option(
    "--query-file",
    "-f",
    "query_files",
    multiple=True,
    help="Query to bind as NAME=PATH (repeatable).",
)
@click.option(
    "--template-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Directory with templates overriding the built-in ones.",
)
@click.option(
    "--schema-file",
    type=click.Path(exists=True, dir_okay=False),
    help="Saved introspection response to use instead of fetching.",
)
@connection_options
def generate(url, output, query_files, template_dir, schema_file, verbose, bearer, headers, timeout):
    """Compile URL's schema, bind queries and write a models module.

    Examples:

        gql-provider generate https://api.example.com/graphql -o ./client/models.py

        gql-provider generate https://api.example.com/graphql -o models.py -f people=./people.graphql
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    auth = build_auth(bearer, headers)

    queries = {}
    for entry in query_files:
        name, sep, path = entry.partition("=")
        if not sep or not name or not path:
            raise click.BadParameter(f"Expected NAME=PATH, got {entry!r}", param_hint="--query-file")
        try:
            queries[name] = Path(path).read_text()
        except OSError as e:
            raise click.BadParameter(
                f"Cannot read query file {path!r}: {e.strerror}", param_hint="--query-file"
            )

    async def build():
        provider = await GraphQLProvider.create(
            url, auth, timeout=timeout, schema_file=schema_file
        )
        bound = await provider.bind_queries(queries)
        return provider, bound

    click.echo(f"Compiling schema of {url}...")
    provider, bound = _run(build())

    if verbose:
        click.echo(f"  Types: {len(provider.registry.generated())}")
        click.echo(f"  Queries: {len(bound)}")

    generator = CodeGenerator(
        provider.registry, queries=bound, source=url, template_dir=template_dir
    )
    path = generator.write(output)
    click.echo(f"Done! Generated models in {path}")


if __name__ == "__main__":
    main()
