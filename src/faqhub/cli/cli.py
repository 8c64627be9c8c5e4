"""CLI entrypoint: Typer app definition and command registration"""

import typer

from faqhub.cli.commands import build_cmd, types_cmd, validate_cmd


app = typer.Typer(name="faqhub", no_args_is_help=True, help="FAQ, guidance and curated list content pipeline")

app.command(name="build")(build_cmd)
app.command(name="validate")(validate_cmd)
app.command(name="types")(types_cmd)
