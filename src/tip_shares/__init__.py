"""
Split pooled tips by hours worked and pay them out in fair bill mixes.

"""

__version__ = "0.1.0"
