"""
Main components for the tip-shares library.

Nothing is exported from this module, users should import from specific submodules:
- tip_shares.library.allocations (allocation, bills, balancing, results)
- tip_shares.library.allocations.manager (TipDistributionManager)
- tip_shares.library.extraction (reading participants from report text)
- tip_shares.library.validation (input and output validation)
"""

from __future__ import annotations
