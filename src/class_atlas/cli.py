"""CLI entrypoint for Class Atlas."""

from __future__ import annotations

from pathlib import Path

import typer
from loguru import logger
from pydantic import ValidationError

from class_atlas.errors import AtlasError

app = typer.Typer(
    name="class-atlas",
    help="Class Atlas — draw UML class diagrams from Python code or type catalogs.",
    no_args_is_help=True,
)

_DOT_SUFFIXES = frozenset({".dot", ".gv"})


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _load_provider(catalog: Path | None):
    """Catalog-backed provider when a catalog is given, else live introspection."""
    from class_atlas.metadata import IntrospectionProvider, load_catalog

    if catalog is None:
        return IntrospectionProvider()
    try:
        return load_catalog(catalog)
    except (OSError, ValueError, ValidationError, AtlasError) as exc:
        logger.error("Cannot load catalog {} — {}", catalog, exc)
        raise typer.Exit(code=1) from exc


def _build(
    names: list[str],
    extensions: list[str],
    catalog: Path | None,
    overrides: dict[str, bool | None],
):
    """Create a builder from settings plus CLI overrides and add everything requested."""
    from class_atlas.builder import DiagramBuilder
    from class_atlas.settings import AtlasSettings

    settings = AtlasSettings()
    options = settings.options
    for option, flag in overrides.items():
        if flag is not None:
            options = options.with_option(option, flag)

    builder = DiagramBuilder(_load_provider(catalog), options=options)
    try:
        for name in names:
            builder.add_type(name)
        for extension in extensions:
            builder.add_extension_module(extension)
    except AtlasError as exc:
        logger.error("{}", exc)
        raise typer.Exit(code=1) from exc
    return settings, builder


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def diagram(
    names: list[str] | None = typer.Argument(None, help="Types to draw (catalog names or dotted Python paths)."),
    catalog: Path | None = typer.Option(None, "--catalog", "-c", help="JSON or TOML type catalog to read from."),
    extension: list[str] | None = typer.Option(None, "--extension", "-e", help="Extension module (repeatable)."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output file; .dot/.gv writes DOT source."),
    format_: str | None = typer.Option(None, "--format", "-f", help="Graphviz output format (default: file suffix)."),
    note: str | None = typer.Option(None, "--note", help="Attach a note to the first type."),
    show_private: bool | None = typer.Option(None, "--show-private/--hide-private", help="Show private members."),
    show_protected: bool | None = typer.Option(
        None, "--show-protected/--hide-protected", help="Show protected members."
    ),
    show_constants: bool | None = typer.Option(None, "--constants/--no-constants", help="Show constants."),
    only_self: bool | None = typer.Option(None, "--only-self/--inherited", help="Hide inherited members."),
    add_parents: bool | None = typer.Option(None, "--parents/--no-parents", help="Add parent types."),
) -> None:
    """Build a class diagram and print or render it."""
    from class_atlas.errors import RenderError
    from class_atlas.render import render_diagram, to_dot, write_dot

    names = names or []
    extensions = extension or []
    if not names and not extensions:
        logger.error("Nothing to draw — pass type names and/or --extension")
        raise typer.Exit(code=1)

    settings, builder = _build(
        names,
        extensions,
        catalog,
        {
            "show_private": show_private,
            "show_protected": show_protected,
            "show_constants": show_constants,
            "only_self": only_self,
            "add_parents": add_parents,
        },
    )
    if note:
        target = builder.add_type(names[0]) if names else None
        builder.add_note(note, target)

    graph_name = settings.render.graph_name
    if output is None:
        typer.echo(to_dot(builder.diagram, graph_name), nl=False)
        return
    if output.suffix.lower() in _DOT_SUFFIXES and format_ in (None, "dot", "gv"):
        write_dot(builder.diagram, output, graph_name)
        logger.info("Wrote {} ({} vertices)", output, len(builder.diagram))
        return
    try:
        render_diagram(builder.diagram, output, settings.render, format_)
    except RenderError as exc:
        logger.error("{}", exc)
        raise typer.Exit(code=1) from exc


@app.command()
def components(
    names: list[str] = typer.Argument(..., help="Types to add before splitting into components."),
    catalog: Path | None = typer.Option(None, "--catalog", "-c", help="JSON or TOML type catalog to read from."),
) -> None:
    """Show how the diagram for NAMES splits into connected components."""
    _, builder = _build(names, [], catalog, {})
    parts = builder.extract_all_components()
    typer.echo(f"{builder.component_count()} component(s)")
    for i, part in enumerate(parts, 1):
        members = ", ".join(str(v.id) for v in part.vertices())
        typer.echo(f"{i}. {members}")


if __name__ == "__main__":
    app()
