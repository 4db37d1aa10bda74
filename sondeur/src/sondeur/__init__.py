"""
Sondeur - EVM wallet balance and usage checker.
"""

__version__ = "0.1.0"
