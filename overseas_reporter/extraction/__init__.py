"""
Stock extraction from the travel shop page.

Modules:
    page - PageHost protocol and StaticPage snapshot host
    location - LocationResolver for the current destination
    detail_probe - DetailProbeResolver (click, read and close item overlays)
    orchestrator - ExtractionOrchestrator running the tier cascade
    validator - Deduplication and batch yield rules
    parsers - Strict and loose tier parsers
"""

from .detail_probe import DetailProbeResolver
from .location import LocationResolver
from .orchestrator import ExtractionOrchestrator
from .page import PageHost, StaticPage
from .parsers import Candidate, LooseCandidateScanner, StrictSectionWalker
from .validator import BatchValidator, dedupe_items

__all__ = [
    # Hosts
    'PageHost',
    'StaticPage',
    # Location
    'LocationResolver',
    # Tiers
    'StrictSectionWalker',
    'LooseCandidateScanner',
    'Candidate',
    'DetailProbeResolver',
    # Orchestration
    'ExtractionOrchestrator',
    'BatchValidator',
    'dedupe_items',
]
