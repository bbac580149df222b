"""
Utility functions for the tip-shares library.

"""

from tip_shares.library.utils.config import load_calculator_config

__all__ = [
    "load_calculator_config",
]
