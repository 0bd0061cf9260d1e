"""
Overseas Shop Stock Reporter

Modules:
    models      - Data models (ItemRecord, ExtractionBatch, Tier)
    common      - Shared utilities (config loader, text parsers, DOM helpers, logging)
    extraction  - Tiered extraction (location, strict walker, loose scanner, detail probe)
    reporting   - Fingerprinting, cooldown and upload to the collector
    runtime     - Debounced re-extraction on page changes
"""

__version__ = "1.3.0"
