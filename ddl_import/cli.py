"""Command-line interface for ddl-import."""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Literal

import click

from ddl_import import __version__
from ddl_import.exceptions import DDLImportError
from ddl_import.generators import DiagramOptions, convert_to_diagram
from ddl_import.layout import LayoutOptions
from ddl_import.models import ParseResult
from ddl_import.parsers import OracleParser, ParserOptions
from ddl_import.validators import validate_oracle_dialect


def _summary(result: ParseResult) -> str:
    fk_counts: dict[str, int] = {}
    for fk in result.relationships:
        fk_counts[fk.source_table_id] = fk_counts.get(fk.source_table_id, 0) + 1

    lines = [f"Found {len(result.tables)} tables, {len(result.relationships)} relationships", "", "Summary:"]
    for table in result.tables:
        parts = [f"{len(table.columns)} columns"]
        if fk_counts.get(table.id):
            parts.append(f"{fk_counts[table.id]} FK")
        if table.indexes:
            parts.append(f"{len(table.indexes)} indexes")
        name = f"{table.schema}.{table.name}" if table.schema else table.name
        lines.append(f"  - {name}: {', '.join(parts)}")
    return "\n".join(lines)


@click.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write output to this file instead of stdout.",
)
@click.option(
    "-f", "--format",
    type=click.Choice(["summary", "json", "diagram"]),
    default="summary",
    help="Output format (default: summary)",
)
@click.option(
    "--direction",
    type=click.Choice(["TB", "LR"]),
    default="TB",
    help="Layout direction for diagram output: TB (top-bottom) or LR (left-right)",
)
@click.option(
    "--no-grammar",
    is_flag=True,
    envvar="DDL_IMPORT_NO_GRAMMAR",
    help="Skip the sqlglot pass and use only the regex extractors (or set DDL_IMPORT_NO_GRAMMAR).",
)
@click.option(
    "--validate",
    is_flag=True,
    help="Report syntax from other databases before importing.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.version_option(version=__version__)
def main(
    input_file: Path,
    output: Path | None,
    format: Literal["summary", "json", "diagram"],
    direction: Literal["TB", "LR"],
    no_grammar: bool,
    validate: bool,
    verbose: bool,
) -> None:
    """Import an Oracle DDL script into a schema model.

    INPUT_FILE is the path to a SQL file containing CREATE TABLE statements.

    \b
    Examples:
      # Print a per-table summary
      ddl-import schema.sql

      # Write tables and relationships as JSON
      ddl-import schema.sql -f json -o schema.json

      # Build a laid-out diagram
      ddl-import schema.sql -f diagram --direction LR
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        sql = input_file.read_text()

        if validate:
            validation = validate_oracle_dialect(sql)
            for error in validation.errors:
                click.echo(f"Error (line {error.line}): {error.message}", err=True)
            for warning in validation.warnings:
                click.echo(f"Warning: {warning.message}", err=True)

        parser = OracleParser(ParserOptions(use_grammar=not no_grammar))
        result = parser.parse(sql)

        if format == "summary":
            content = _summary(result)
        elif format == "json":
            content = json.dumps(asdict(result), indent=2)
        else:
            diagram = convert_to_diagram(result, DiagramOptions(layout=LayoutOptions(direction=direction)))
            content = json.dumps(asdict(diagram), indent=2)

        if output:
            output.write_text(content + "\n")
            click.echo(f"Output saved to: {output}")
        else:
            click.echo(content)

    except click.ClickException:
        raise
    except (DDLImportError, OSError) as e:
        raise click.ClickException(str(e))


if __name__ == "__main__":
    main()
