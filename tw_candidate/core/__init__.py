"""tw_candidate.core — Foundation layer.

Contains the candidate types, the token parser and its cache, the validation
and normalization collaborators, config loading, and the report builder.
This module has NO dependencies on tw_candidate.commands or tw_candidate.registry.
Only stdlib and PIL are allowed here.
"""
