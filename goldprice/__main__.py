"""Allow ``python -m goldprice``."""

from goldprice.cli import app

app(prog_name="goldprice")
