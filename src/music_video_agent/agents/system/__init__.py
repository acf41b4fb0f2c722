"""
System agents: workflow setup
"""

from .agent_init import init_step

__all__ = ['init_step']
