"""Command-line interface for filterz."""

import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from .config import Config, load_config, write_default_config
from .filter import (
    FilterCodecError,
    FilterSet,
    decode_filter_set,
    encode_filter_set,
    list_comparators,
    validate_expression,
)
from .log import setup_logger


app = typer.Typer(
    name="filterz",
    help="Translate filter sets to and from wire filter expressions",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "filterz" / "config.toml"


def _read_input(value: Optional[str]) -> Optional[str]:
    """Resolve '-' to stdin and '@path' to a file's contents."""
    if value is None:
        return None
    if value == "-":
        return sys.stdin.read().strip()
    if value.startswith("@"):
        return Path(value[1:]).expanduser().read_text(encoding="utf-8").strip()
    return value


def _fail(message: str) -> None:
    err_console.print(f"[bold red]错误:[/bold red] {escape(message)}")
    raise typer.Exit(code=1)


def _config(ctx: typer.Context) -> Config:
    return ctx.obj if isinstance(ctx.obj, Config) else Config()


def _print_json(data: Any) -> None:
    typer.echo(json.dumps(data, ensure_ascii=False, indent=2))


def _print_filter_table(filter_set: FilterSet) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Field", style="cyan")
    table.add_column("Option")
    table.add_column("Query", style="yellow")

    for index, condition in enumerate(filter_set.filters, 1):
        if condition is None:
            table.add_row(str(index), Text("<malformed>", style="red"), "", "")
            continue
        table.add_row(str(index), Text(condition.field), Text(condition.option), Text(condition.query))

    console.print(
        f"[bold cyan]{len(filter_set.filters)} 个条件[/bold cyan] "
        f"inclusion={filter_set.inclusion_type} "
        f"absent_fields={filter_set.includes_absent_field_names}"
    )
    console.print(table)


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to a config.toml (default: $FILTERZ_CONFIG or ~/.config/filterz/config.toml)"
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Console log level (DEBUG, INFO, WARNING, ...)"
    ),
):
    """Decode and encode filter expressions for the remote filtering API."""
    try:
        config = load_config(config_path)
    except ValueError as e:
        _fail(f"配置文件错误: {e}")
    if log_level:
        config.log_level = log_level.upper()
    setup_logger(config.log_level, config.log_file)
    ctx.obj = config


@app.command()
def decode(
    ctx: typer.Context,
    expression: Optional[str] = typer.Argument(
        None,
        help="Wire expression. Use '-' to read stdin, '@file' to read a file; omit for a null filter."
    ),
    output_format: Optional[str] = typer.Option(
        None,
        "--format", "-f",
        help="Output format: json or table"
    ),
    strict: Optional[bool] = typer.Option(
        None,
        "--strict/--lenient",
        help="Fail on malformed conditions instead of reporting them as null"
    ),
):
    """Decode a wire expression into a filter set."""
    config = _config(ctx)
    if output_format:
        try:
            config = replace(config, output_format=output_format)
        except ValueError as e:
            _fail(str(e))

    try:
        filter_set = decode_filter_set(
            _read_input(expression),
            strict=config.strict if strict is None else strict,
        )
    except (FilterCodecError, OSError) as e:
        _fail(str(e))

    if config.output_format == "table":
        _print_filter_table(filter_set)
    else:
        _print_json(filter_set.to_dict())


@app.command()
def encode(
    ctx: typer.Context,
    source: str = typer.Argument(
        ...,
        help="Filter set as JSON. Use '-' to read stdin, '@file' to read a file."
    ),
    legacy: Optional[bool] = typer.Option(
        None,
        "--legacy/--no-legacy",
        help="Send every STRING_* comparator as MATCHES, like the deployed API expects"
    ),
):
    """Encode a JSON filter set into a wire expression ('null' when empty)."""
    config = _config(ctx)
    try:
        data: Dict[str, Any] = json.loads(_read_input(source) or "{}")
    except (json.JSONDecodeError, OSError) as e:
        _fail(f"无效的 JSON 输入: {e}")

    if not isinstance(data, dict):
        _fail("Filter set must be a JSON object")

    try:
        text = encode_filter_set(
            data,
            legacy_string_tokens=config.legacy_string_tokens if legacy is None else legacy,
        )
    except (FilterCodecError, KeyError) as e:
        _fail(str(e))

    typer.echo("null" if text is None else text)


@app.command()
def validate(
    expression: Optional[str] = typer.Argument(
        None,
        help="Wire expression. Use '-' to read stdin, '@file' to read a file."
    ),
):
    """Check that every condition of a wire expression decodes."""
    try:
        result = validate_expression(_read_input(expression))
    except OSError as e:
        _fail(str(e))

    _print_json(result)
    if not result["valid"]:
        raise typer.Exit(code=1)


@app.command()
def comparators():
    """List the registered comparators."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Token", style="cyan")
    table.add_column("Label")
    table.add_column("Call name", style="yellow")

    for item in list_comparators():
        table.add_row(item["token"], item["label"], item["call_name"])

    console.print(table)


@app.command("init-config")
def init_config(
    path: Path = typer.Argument(
        DEFAULT_CONFIG_PATH,
        help="Where to write the default config.toml"
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Overwrite an existing file"
    ),
):
    """Write the default configuration file."""
    if path.expanduser().exists() and not force:
        _fail(f"{path} already exists (use --force to overwrite)")
    target = write_default_config(path)
    console.print(f"[bold green]✓[/bold green] 配置已写入: {escape(str(target))}")


if __name__ == "__main__":
    app()
