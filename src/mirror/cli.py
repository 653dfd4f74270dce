"""Mirror command-line interface."""

from __future__ import annotations

from pathlib import Path

import click

from mirror import __version__
from mirror.analysis import extract_expressions, group_signatures_with_examples
from mirror.ast_nodes import Program
from mirror.config import MirrorConfig, discover_config
from mirror.errors import CompileError, DiagnosticRenderer
from mirror.lexer import Lexer
from mirror.parser import Parser
from mirror.serializer import to_json

SOURCE_SUFFIX = ".mirror"


def _source_files(target: Path) -> list[Path]:
    if target.is_dir():
        return sorted(target.rglob(f"*{SOURCE_SUFFIX}"))
    return [target]


def _renderer(ctx: click.Context, config: MirrorConfig) -> DiagnosticRenderer:
    color = config.output.color and not ctx.obj.get("no_color", False)
    return DiagnosticRenderer(color=color)


def _parse_source(
    ctx: click.Context, source: str, filename: str, config: MirrorConfig,
) -> Program | None:
    """Parse source text, echoing diagnostics on failure. Returns None on error."""
    try:
        return Parser(source, filename, max_depth=config.parser.max_depth).parse()
    except CompileError as e:
        renderer = _renderer(ctx, config)
        renderer.add_source(filename, source)
        for diag in e.diagnostics:
            click.echo(renderer.render(diag), err=True)
        return None


def _parse_file(ctx: click.Context, file: str) -> Program:
    """Parse a single file or exit with status 1."""
    path = Path(file)
    config = discover_config(path)
    program = _parse_source(ctx, path.read_text(), str(path), config)
    if program is None:
        raise SystemExit(1)
    return program


@click.group()
@click.version_option(__version__, prog_name="mirror")
@click.option("--no-color", is_flag=True, help="Disable colored diagnostics.")
@click.pass_context
def main(ctx: click.Context, no_color: bool) -> None:
    """Tools for the Mirror signature/example DSL."""
    ctx.ensure_object(dict)
    ctx.obj["no_color"] = no_color


@main.command()
@click.argument("path", default=".", type=click.Path(exists=True))
@click.pass_context
def check(ctx: click.Context, path: str) -> None:
    """Parse Mirror files and report syntax errors."""
    target = Path(path)
    files = _source_files(target)
    if not files:
        click.echo(f"warning: no {SOURCE_SUFFIX} files found", err=True)
        return

    config = discover_config(target)
    had_errors = False
    for file in files:
        if _parse_source(ctx, file.read_text(), str(file), config) is None:
            had_errors = True

    if had_errors:
        raise SystemExit(1)
    click.echo(f"checked {len(files)} file(s) — no errors")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print the AST as JSON.")
@click.pass_context
def view(ctx: click.Context, file: str, as_json: bool) -> None:
    """View the AST of a Mirror source file."""
    program = _parse_file(ctx, file)
    if as_json:
        click.echo(to_json(program))
        return
    click.echo("Program")
    for stmt in program:
        _dump_ast(stmt, 1)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def tokens(file: str) -> None:
    """Print the tokens of a Mirror source file, one per line."""
    for token in Lexer(Path(file).read_text(), file).lex():
        click.echo(token)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def expressions(ctx: click.Context, file: str) -> None:
    """Print the call expressions of a file as JSON."""
    program = _parse_file(ctx, file)
    click.echo(to_json(extract_expressions(program)))


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def signatures(ctx: click.Context, file: str) -> None:
    """Print each signature with its examples as JSON."""
    program = _parse_file(ctx, file)
    click.echo(to_json(group_signatures_with_examples(program)))


@main.command(name="format")
@click.argument("path", default=".", type=click.Path(exists=True))
@click.option("--check", is_flag=True, help="Check formatting without modifying files.")
@click.option("--stdin", "use_stdin", is_flag=True, help="Read from stdin, write to stdout.")
@click.pass_context
def format_cmd(ctx: click.Context, path: str, check: bool, use_stdin: bool) -> None:
    """Format Mirror source files."""
    import sys

    from mirror.formatter import MirrorFormatter

    formatter = MirrorFormatter()

    if use_stdin:
        source = sys.stdin.read()
        program = _parse_source(ctx, source, "<stdin>", discover_config())
        if program is None:
            raise SystemExit(1)
        formatted = formatter.format(program)
        if check:
            if formatted != source:
                raise SystemExit(1)
        else:
            click.echo(formatted, nl=False)
        return

    target = Path(path)
    files = _source_files(target)
    if not files:
        click.echo(f"no {SOURCE_SUFFIX} files found", err=True)
        return

    config = discover_config(target)
    needs_formatting = False
    had_errors = False
    for file in files:
        source = file.read_text()
        program = _parse_source(ctx, source, str(file), config)
        if program is None:
            had_errors = True
            continue

        formatted = formatter.format(program)
        if formatted != source:
            if check:
                click.echo(f"would reformat {file}")
                needs_formatting = True
            else:
                file.write_text(formatted)
                click.echo(f"formatted {file}")

    if had_errors or (check and needs_formatting):
        raise SystemExit(1)


def _dump_ast(node: object, depth: int) -> None:
    """Print a readable AST dump."""
    indent = "  " * depth
    name = type(node).__name__

    if hasattr(node, "__dataclass_fields__"):
        click.echo(f"{indent}{name}")
        for field_name in node.__dataclass_fields__:  # type: ignore[union-attr]
            value = getattr(node, field_name)
            if isinstance(value, tuple):
                if value:
                    click.echo(f"{indent}  {field_name}:")
                    for item in value:
                        _dump_ast(item, depth + 2)
                else:
                    click.echo(f"{indent}  {field_name}: []")
            elif hasattr(value, "__dataclass_fields__"):
                click.echo(f"{indent}  {field_name}:")
                _dump_ast(value, depth + 2)
            else:
                click.echo(f"{indent}  {field_name}: {value!r}")
    else:
        click.echo(f"{indent}{name}: {node!r}")
