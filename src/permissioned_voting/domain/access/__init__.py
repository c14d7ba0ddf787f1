"""
Access Control

Administrator role and ownership transfer.
"""

from permissioned_voting.domain.access.ownable import Ownable

__all__ = ["Ownable"]
