from pdfweave.cli import cli

cli()
