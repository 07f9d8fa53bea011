"""CLI entrypoint: Typer app definition and command registration"""

import typer

from hashview.cli.commands import classify_cmd, fragment_cmd, view_cmd


app = typer.Typer(name="hashview", no_args_is_help=True, help="Content-addressed artifact viewer")

app.command(name="view")(view_cmd)
app.command(name="fragment")(fragment_cmd)
app.command(name="classify")(classify_cmd)
