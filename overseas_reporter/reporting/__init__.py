"""
Reporting of extracted batches to the stock collector.

Modules:
    collector_client - HTTP client for the collector endpoint
    cooldown - Per-location upload cooldown (memory and JSON file)
    fingerprint - Deterministic batch digest
    reporter - ChangeGatedReporter deciding when to upload
    status - Status sink interface and logging sink
"""

from .collector_client import CollectorClient, UploadResult
from .cooldown import CooldownStore, JsonFileCooldown, MemoryCooldown, cooldown_from_settings
from .fingerprint import batch_fingerprint
from .reporter import ChangeGatedReporter, ReportOutcome, format_breakdown
from .status import LogStatus, StatusSink

__all__ = [
    # Transport
    'CollectorClient',
    'UploadResult',
    # Cooldown
    'CooldownStore',
    'MemoryCooldown',
    'JsonFileCooldown',
    'cooldown_from_settings',
    # Reporting
    'batch_fingerprint',
    'ChangeGatedReporter',
    'ReportOutcome',
    'format_breakdown',
    # Status
    'StatusSink',
    'LogStatus',
]
