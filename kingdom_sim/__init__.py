"""
Kingdom simulation core.

Resource generation, faction dynamics, event chains and prestige resets for an
incremental kingdom-management game. Everything revolves around the Kingdom
aggregate; the services take it as a parameter and hold no references to it.
"""

__version__ = "0.1.0"
