"""
Infrastructure Layer

Adapters for the domain's persistence ports.
"""
