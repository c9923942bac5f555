"""Allow ``python -m vectorgen``."""

from vectorgen.cli import run

run()
