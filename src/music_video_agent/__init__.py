"""Music video script agent: turns a song idea into a staged production plan"""

__version__ = "1.0.0"
