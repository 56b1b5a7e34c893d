"""
c4engine - Connect Four game engine

This package provides the board model, the rules engine that owns placement
and win/draw detection, pluggable opponent strategies and a small command
line shell for playing against them.
"""

__version__ = '0.2.0'
