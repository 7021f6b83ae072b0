"""
project: levelgen
module: __init__.py

Procedural level generation for a turn-based dungeon crawler: room
placement, door and entry/exit selection, container population and A*
corridor carving, driven by a six-stage pipeline that reports progress.
"""

__version__ = "0.1.0"
