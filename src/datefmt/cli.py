"""Command-line interface for datefmt."""

from datetime import datetime
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table
from zoneinfo import ZoneInfoNotFoundError

from datefmt.base import DateFormat
from datefmt.errors import DateFormatError
from datefmt.fields import PATTERN_CHARS, CalendarField, attribute_for_pattern_field
from datefmt.locales import LocaleKind
from datefmt.resolver import StyleResolver, get_available_locales
from datefmt.simple import SimpleDateFormat
from datefmt.styles import NONE, RELATIVE, STYLE_NAMES

app = typer.Typer(
    name="datefmt",
    help="Locale-aware date formatting and parsing from the command line",
    add_completion=False,
)

_STYLES = {name: index for index, name in enumerate(STYLE_NAMES)}
_STYLES["none"] = NONE


def _style(name: str, relative: bool) -> int:
    try:
        style = _STYLES[name.lower()]
    except KeyError:
        typer.echo(
            f"Error: Unknown style '{name}'. Use one of: {', '.join(_STYLES)}", err=True
        )
        raise typer.Exit(1)
    if relative and style != NONE:
        style |= RELATIVE
    return style


def _build_formatter(
    locale: Optional[str],
    pattern: Optional[str],
    skeleton: Optional[str],
    date_style: str,
    time_style: str,
    relative: bool,
    timezone: Optional[str],
) -> DateFormat:
    resolver = StyleResolver()
    try:
        if pattern:
            fmt: DateFormat = SimpleDateFormat(pattern, locale)
        elif skeleton:
            fmt = resolver.resolve_skeleton(skeleton, locale)
        else:
            fmt = resolver.resolve(
                _style(date_style, relative), _style(time_style, relative), locale
            )
        if timezone:
            fmt.set_time_zone(timezone)
    except ZoneInfoNotFoundError:
        typer.echo(f"Error: Unknown time zone: {timezone}", err=True)
        raise typer.Exit(1)
    except (DateFormatError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    return fmt


LocaleOption = Annotated[
    Optional[str], typer.Option("--locale", "-l", help="Locale (e.g. en_US, de-AT)")
]
PatternOption = Annotated[
    Optional[str], typer.Option("--pattern", "-p", help="Explicit date/time pattern")
]
SkeletonOption = Annotated[
    Optional[str], typer.Option("--skeleton", "-s", help="Skeleton such as yMMMd or jm")
]
DateStyleOption = Annotated[
    str, typer.Option("--date-style", "-d", help="full, long, medium, short or none")
]
TimeStyleOption = Annotated[
    str, typer.Option("--time-style", "-t", help="full, long, medium, short or none")
]
RelativeOption = Annotated[
    bool, typer.Option("--relative", "-r", help="Name days near today (yesterday, today...)")
]
TimezoneOption = Annotated[
    Optional[str], typer.Option("--timezone", "-z", help="IANA time zone (e.g. Europe/Paris)")
]


@app.command(name="format")
def format_cmd(
    value: Annotated[
        Optional[str],
        typer.Argument(help="ISO 8601 timestamp or epoch milliseconds (default: now)"),
    ] = None,
    locale: LocaleOption = None,
    pattern: PatternOption = None,
    skeleton: SkeletonOption = None,
    date_style: DateStyleOption = "medium",
    time_style: TimeStyleOption = "medium",
    relative: RelativeOption = False,
    timezone: TimezoneOption = None,
    parts: Annotated[
        bool, typer.Option("--parts", help="Show the fields of the formatted text")
    ] = False,
) -> None:
    """Format a timestamp."""
    fmt = _build_formatter(locale, pattern, skeleton, date_style, time_style, relative, timezone)

    moment: "datetime | int"
    if value is None:
        moment = datetime.now(fmt.time_zone)
    elif value.lstrip("-").isdigit():
        moment = int(value)
    else:
        try:
            moment = datetime.fromisoformat(value)
        except ValueError:
            typer.echo(f"Error: Not an ISO 8601 timestamp: {value}", err=True)
            raise typer.Exit(1)

    if not parts:
        typer.echo(fmt.format(moment))
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Text", style="cyan")
    table.add_column("Field", style="white")
    for part in fmt.format_to_parts(moment):
        table.add_row(repr(part.text), part.field.name if part.field else "literal")
    Console().print(table)


@app.command(name="parse")
def parse_cmd(
    text: Annotated[str, typer.Argument(help="Text to parse")],
    locale: LocaleOption = None,
    pattern: PatternOption = None,
    skeleton: SkeletonOption = None,
    date_style: DateStyleOption = "medium",
    time_style: TimeStyleOption = "medium",
    relative: RelativeOption = False,
    timezone: TimezoneOption = None,
    strict: Annotated[
        bool, typer.Option("--strict", help="Reject out-of-range fields")
    ] = False,
) -> None:
    """Parse text and print it as an ISO 8601 timestamp."""
    fmt = _build_formatter(locale, pattern, skeleton, date_style, time_style, relative, timezone)
    if strict:
        fmt.set_lenient(False)

    try:
        result = fmt.parse(text)
    except DateFormatError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if result is None:
        typer.echo(f'Error: Unparseable date: "{text}"', err=True)
        raise typer.Exit(1)
    typer.echo(result.isoformat())


@app.command(name="skeleton")
def skeleton_cmd(
    skeleton: Annotated[str, typer.Argument(help="Skeleton such as yMMMd or jm")],
    locale: LocaleOption = None,
) -> None:
    """Show the best pattern of a locale for a skeleton."""
    try:
        fmt = StyleResolver().resolve_skeleton(skeleton, locale)
    except DateFormatError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(fmt.to_pattern())
    typer.echo(f"  Locale: {fmt.get_locale(LocaleKind.VALID)}")


@app.command(name="fields")
def fields_cmd() -> None:
    """List calendar fields, pattern letters and field attributes."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Id", justify="right")
    table.add_column("Letter", justify="center", style="cyan")
    table.add_column("Calendar field", style="white")
    table.add_column("Attribute", style="green")

    for char in PATTERN_CHARS:
        field = CalendarField.from_pattern_char(char)
        table.add_row(
            str(int(field)), char, field.name, attribute_for_pattern_field(field).name
        )
    Console().print(table)


@app.command(name="locales")
def locales_cmd(
    prefix: Annotated[
        Optional[str], typer.Argument(help="Only list locales starting with this")
    ] = None,
) -> None:
    """List locales with date format data."""
    names = [str(locale) for locale in get_available_locales()]
    if prefix:
        names = [name for name in names if name.lower().startswith(prefix.lower())]

    if not names:
        typer.echo(f"No locales match '{prefix}'", err=True)
        raise typer.Exit(1)

    for name in names:
        typer.echo(name)
    typer.echo(f"  Total: {len(names):,}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
