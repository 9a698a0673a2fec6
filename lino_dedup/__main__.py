"""Allow ``python -m lino_dedup``."""

from .cli.main import main

main()
