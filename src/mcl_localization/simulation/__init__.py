"""
Robot and laser simulation over a known world
"""

from .robot_sim import RobotSim

__all__ = ['RobotSim']
