"""mcpspec CLI — the main entry point for the MCP server registry tooling."""

import sys

import click
from dotenv import find_dotenv, load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mcpspec import __version__

console = Console()

# First matching substring wins; order matters.
ERROR_SUGGESTIONS = (
    (
        "API key",
        [
            "Suggestion: Check your API key or set it in the .env file.",
            "Example .env file content:",
            "ANTHROPIC_API_KEY=your_api_key_here",
        ],
    ),
    (
        "URL",
        [
            "Suggestion: Make sure the URL is valid and points to a git repository.",
            "Example: https://github.com/username/repo",
        ],
    ),
    (
        "fetch",
        [
            "Suggestion: Check your internet connection or try again later.",
            "The URL might be temporarily unavailable or require authentication.",
        ],
    ),
    (
        "JSON",
        [
            "Suggestion: The LLM might have generated invalid JSON.",
            "Try again with a different temperature setting (e.g., --temperature 0.1)",
        ],
    ),
)


def suggestion_for(message: str) -> list[str]:
    """Return the suggestion lines for an error message, if any apply."""
    for needle, lines in ERROR_SUGGESTIONS:
        if needle in message:
            return lines
    return []


def _fail(message: str, heading: str = "Error generating package specification:"):
    console.print(f"[red]x {heading}[/]")
    console.print(f"   {escape(message)}")
    lines = suggestion_for(message)
    if lines:
        console.print()
        for line in lines:
            console.print(f"[yellow]{escape(line)}[/]")
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    default="WARNING",
    envvar="MCPSPEC_LOG_LEVEL",
    help="Diagnostic log level (DEBUG, INFO, WARNING, ERROR).",
)
def main(log_level: str):
    """mcpspec — MCP server registry tooling.

    Draft package specs from repository URLs with an LLM, validate the
    definition tree, and build the combined repository.json.
    """
    from mcpspec.logging_config import setup_logging

    load_dotenv(find_dotenv(usecwd=True))
    setup_logging(log_level)


# ── Generate ─────────────────────────────────────────────────────────


@main.command()
@click.argument("url")
@click.option("--output", "-o", default=None, help="Output directory (default: mcp-servers)")
@click.option("--model", "-m", default=None, help="LLM model to use")
@click.option("--temperature", "-t", default=None, help="Temperature for generation, 0 to 1 (default: 0.2)")
@click.option("--api-key", "-k", default=None, help="API key for the LLM service (or set ANTHROPIC_API_KEY)")
@click.option("--max-tokens", type=int, default=None, help="Maximum output tokens")
@click.option("--prompt-file", type=click.Path(exists=True, dir_okay=False), default=None,
              help="Send this prompt instead of fetching repository context")
@click.option("--config", "-c", "config_path", default=None, help="YAML settings file")
def generate(
    url: str,
    output: str | None,
    model: str | None,
    temperature: str | None,
    api_key: str | None,
    max_tokens: int | None,
    prompt_file: str | None,
    config_path: str | None,
):
    """Generate a package specification for the repository at URL."""
    from pathlib import Path

    from mcpspec.config import load_settings
    from mcpspec.errors import SpecGeneratorError
    from mcpspec.generator.package_generator import PackageSpecGenerator
    from mcpspec.llm.client import LLMClient
    from mcpspec.sources.repository import RepositoryContextFetcher

    try:
        settings = load_settings(
            config_path,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            output_dir=output,
            api_key=api_key,
        )
        settings.validate()
    except SpecGeneratorError as e:
        _fail(str(e), heading="Error:")

    prompt_override = Path(prompt_file).read_text() if prompt_file else None

    console.print(f"\n[bold blue]mcpspec[/] — Generating package specification for {escape(url)}\n")

    llm = LLMClient(
        model=settings.model,
        api_key=settings.api_key,
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
    )
    with RepositoryContextFetcher(timeout=settings.http_timeout) as fetcher:
        generator = PackageSpecGenerator(llm, fetcher=fetcher)
        try:
            spec = generator.generate_from_url(url, prompt_override=prompt_override)
            output_path = generator.determine_output_path(spec, settings.output_dir)
            generator.save_to_file(spec, output_path)
        except SpecGeneratorError as e:
            _fail(str(e))
        except OSError as e:
            _fail(f"Failed to save package spec: {e}")

    console.print(f"[green]v Success![/] Package specification saved to {escape(str(output_path))}")
    response = generator.last_response
    if response is not None and response.total_tokens:
        console.print(
            f"  [dim]{response.model}: {response.input_tokens} in / {response.output_tokens} out tokens, "
            f"{response.latency_ms}ms, ~${response.cost_estimate:.4f}[/]"
        )


# ── Validate ─────────────────────────────────────────────────────────


@main.command()
@click.argument("source_dir", default="mcp-servers")
@click.option("--strict", is_flag=True, help="Treat warnings as errors")
def validate(source_dir: str, strict: bool):
    """Validate every server definition file under SOURCE_DIR."""
    from mcpspec.registry.validator import validate_registry

    console.print("\n[bold cyan]MCP Server Definition Validator[/]\n")

    report = validate_registry(source_dir, strict=strict)
    if not report.files:
        console.print("[yellow]No server definition files found.[/]")
        return

    console.print(f"Found {report.total_files} server definition files to validate.\n")
    _print_report(report)

    if not report.passed:
        console.print("\n[red]Validation failed with errors.[/]")
        sys.exit(1)
    console.print("\n[green]All server definitions are valid![/]")


def _print_report(report):
    for result in report.files:
        ok = not result.issues if report.strict else result.passed
        status = "[green]VALID[/]" if ok else "[red]ERROR[/]"
        console.print(f"Validating {escape(str(result.path))}... {status}")
        for issue in result.errors:
            console.print(f"  [red]x[/] [{issue.code}] {escape(issue.message)}")
        for issue in result.warnings:
            console.print(f"  [yellow]![/] [{issue.code}] {escape(issue.message)}")

    console.print(f"\n{report.summary()}")


# ── Build ────────────────────────────────────────────────────────────


@main.command()
@click.argument("output_dir", default="build")
@click.option("--source", "-s", default="mcp-servers", help="Directory of server definitions")
def build(output_dir: str, source: str):
    """Validate definitions and build OUTPUT_DIR/repository.json and index.html."""
    from mcpspec.errors import RegistryValidationError
    from mcpspec.registry.builder import RegistryBuilder

    console.print(f"\n[bold blue]mcpspec[/] — Building registry into {escape(output_dir)}\n")

    builder = RegistryBuilder(source_dir=source, output_dir=output_dir)
    try:
        result = builder.build()
    except RegistryValidationError as e:
        if builder.last_report is not None:
            _print_report(builder.last_report)
        console.print(f"\n[red]x {escape(str(e))}[/]")
        sys.exit(1)

    console.print(
        f"[green]v[/] Combined {result.file_count} definition files "
        f"({result.server_count} servers) into {escape(str(result.repository_path))}"
    )
    for dup in result.duplicate_ids:
        console.print(f"  [yellow]![/] Duplicate server id overridden: {escape(dup)}")

    table = Table(title="Output directory contents")
    table.add_column("File", style="cyan")
    table.add_column("Size", justify="right")
    for path in sorted(result.repository_path.parent.iterdir()):
        if path.is_file():
            table.add_row(path.name, f"{path.stat().st_size} bytes")
    console.print(table)


# ── Schema ───────────────────────────────────────────────────────────


@main.command(name="schema")
def dump_schema():
    """Print the JSON Schema for an MCP server package spec."""
    import json

    from mcpspec.spec.schema import get_schema

    click.echo(json.dumps(get_schema(), indent=2))


if __name__ == "__main__":
    main()
