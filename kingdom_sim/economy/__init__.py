"""
Resource generation and offline catch-up.
"""

from kingdom_sim.economy.resource_generator import ResourceGenerator

__all__ = ["ResourceGenerator"]
