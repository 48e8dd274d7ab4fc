"""
connect_four - Connect Four rules engine

This package provides the Connect Four board state machine and win
detection, a headless game session, a Gymnasium environment for automated
drivers, and a command-line interface for interactive play.
"""

# Version number
__version__ = '0.1.0'
