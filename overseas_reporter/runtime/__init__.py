"""
Runtime wiring for a live page.

Modules:
    scheduler - PassScheduler (single-flight, trailing debounce)
    watcher - ShopWatcher tying page, orchestrator and reporter together
"""

from .scheduler import PassScheduler
from .watcher import ShopWatcher

__all__ = ['PassScheduler', 'ShopWatcher']
