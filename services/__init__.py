"""
Display and scheduling services for termsnake.

This package contains the display sink, the screen layout and the
background tasks that run a game.
"""
