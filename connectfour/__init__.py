"""
connectfour - Two-player Connect Four for the console

This package provides the board with its win detection, the session
controller that runs one or more scored games, and a command-line interface.
"""

# Version number
__version__ = '0.1.0'
