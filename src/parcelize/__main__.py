"""Run the Parcelize CLI with ``python -m parcelize``."""

from parcelize.cli.typer_app import main

main()
