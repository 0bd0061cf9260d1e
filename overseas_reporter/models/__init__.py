"""
Data models for stock extraction.

This module contains pure data classes with no business logic.
"""

from .item import ExtractionBatch, ItemRecord, Tier, make_item

__all__ = ['ItemRecord', 'ExtractionBatch', 'Tier', 'make_item']
