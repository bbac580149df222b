"""
Tip allocation, bill decomposition and balancing for the tip-shares library.

The manager lives in ``tip_shares.library.allocations.manager``.
"""

from .balancing import balance_breakdowns, balance_group, group_by_amount
from .core import allocate
from .denominations import decompose, decompose_all
from .distribution import distribute_tips
from .results import TipDistributionResult, TipResult
from .types import DENOMINATIONS, BillBreakdown, Participant, Share

__all__ = [
    "DENOMINATIONS",
    "BillBreakdown",
    "Participant",
    "Share",
    "TipDistributionResult",
    "TipResult",
    "allocate",
    "balance_breakdowns",
    "balance_group",
    "decompose",
    "decompose_all",
    "distribute_tips",
    "group_by_amount",
]
