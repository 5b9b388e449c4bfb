"""Allow ``python -m trello_cli``."""

from trello_cli.cli import main

main()
