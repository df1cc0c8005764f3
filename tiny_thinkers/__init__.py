"""
Tiny Thinkers - a game where children train an AI friend to see, hear and think
"""

__version__ = "1.0.0"
