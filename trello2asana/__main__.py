"""Allow ``python -m trello2asana``."""

from trello2asana.cli import main

main()
