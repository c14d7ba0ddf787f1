"""Permissioned voting workflow: registered voters, proposals, single ballots, tally."""

__version__ = "0.1.0"
