import logging
import pathlib
from typing import Annotated, Optional

import typer
from rich.table import Table

from ..document import Document

from .console import console, err_console

LOG_LEVELS = [
    logging.CRITICAL,
    logging.ERROR,
    logging.WARNING,
    logging.INFO,
    logging.DEBUG,
]

Path = Annotated[pathlib.Path, typer.Argument(dir_okay=False, resolve_path=True)]
ExistingPath = Annotated[
    pathlib.Path, typer.Argument(exists=True, dir_okay=False, resolve_path=True)
]

app = typer.Typer(no_args_is_help=True)


@app.callback()
def common(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, min=0, max=5, help="set logging level"
        ),
    ] = 0
):
    """Read and edit INI files without losing their comments."""

    if verbose == 0:
        logging.disable()
    else:
        logging.disable(logging.NOTSET)
        logging.basicConfig(level=LOG_LEVELS[verbose - 1])


@app.command()
def sections(file: ExistingPath):
    """List the sections in a file."""

    for name in Document(file).sections:
        console.print(name or "(preamble)", markup=False, highlight=False)


@app.command()
def show(file: ExistingPath):
    """Show every setting in a file."""

    doc = Document(file)

    table = Table(title=str(file))
    for column in ("Section", "Key", "Value", "Comment"):
        table.add_column(column)

    for name in doc:
        for setting in doc[name].settings():
            table.add_row(
                name,
                setting.key,
                "-" if setting.value is None else setting.value,
                setting.comment or "",
            )

    console.print(table)


@app.command()
def get(
    file: ExistingPath,
    section: str,
    key: str,
    default: Annotated[
        Optional[str], typer.Option(help="print this if the key does not exist")
    ] = None,
):
    """Print a value. Exits with 1 if the key does not exist and there is no default."""

    doc = Document(file)

    if not doc.has_setting(section, key):
        if default is None:
            err_console.print(f"no such key: [{section}] {key}", markup=False)
            raise typer.Exit(code=1)

        value = default
    else:
        # Keys without a value print as an empty line.
        value = doc.get(section, key) or ""

    console.print(value, markup=False, highlight=False)


@app.command("set")
def set_(
    file: Path,
    section: str,
    key: str,
    value: Annotated[
        Optional[str], typer.Argument(help="if omitted, the key is written without a value")
    ] = None,
):
    """Set a value, creating the file and section if needed."""

    doc = Document(file)
    doc.set(section, key, value)
    doc.persist()


@app.command()
def remove(
    file: ExistingPath,
    section: str,
    key: Annotated[
        Optional[str], typer.Argument(help="if omitted, the whole section is removed")
    ] = None,
):
    """Remove a section or a single key."""

    doc = Document(file)

    if key is None:
        doc.remove_section(section)
    else:
        doc.remove_setting(section, key)

    doc.persist()


@app.command()
def fmt(
    file: ExistingPath,
    check: Annotated[
        bool, typer.Option(help="only check if the file is already formatted")
    ] = False,
):
    """Rewrite a file in normalized form (quoted values, comments before their entries)."""

    doc = Document(file)

    if check:
        if file.read_bytes() != doc.to_str().encode(doc.encoding):
            err_console.print(f"{file} would be reformatted", markup=False)
            raise typer.Exit(code=1)

        return

    doc.persist()
