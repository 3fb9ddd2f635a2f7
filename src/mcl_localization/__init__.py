"""
Monte Carlo localization of a mobile robot on a known map
"""

__version__ = "1.0.0"
