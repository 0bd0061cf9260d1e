"""
Tier parsers for shop stock extraction.

Each parser handles one layout family:
- StrictSectionWalker: desktop layout with structural section headers and rows
- LooseCandidateScanner: any layout, headers and item cards matched by text
"""

from .loose_scanner import Candidate, LooseCandidateScanner, parse_stock
from .strict_walker import StrictSectionWalker

__all__ = [
    'StrictSectionWalker',
    'LooseCandidateScanner',
    'Candidate',
    'parse_stock',
]
