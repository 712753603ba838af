"""CLI commands.

Every module here that defines a `command` object (a Command) is picked up
by tw_candidate.registry.discover(). The module docstring is the text shown
by `tw-candidate help <name>`.
"""
