"""CLI entrypoint: Typer app definition and command registration"""

import typer

from blogsite.cli.commands import build_cmd, check_cmd, routes_cmd


app = typer.Typer(name="blogsite", no_args_is_help=True, help="Static blog builder: resolve posts and pages, render HTML")

app.command(name="build")(build_cmd)
app.command(name="routes")(routes_cmd)
app.command(name="check")(check_cmd)
