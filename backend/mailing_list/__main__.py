"""Allows `python -m mailing_list` as an alias for the `mailing-list` script."""

from mailing_list.server import main

main()
