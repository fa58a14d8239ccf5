# Integration Module
"""
Audit logging for sealing operations.

Peers are recorded by public-key fingerprint only.
"""

from .event_logger import (
    EventType,
    SecurityEvent,
    EventLogger,
    get_key_fingerprint,
    create_event_logger,
)

__all__ = [
    'EventType',
    'SecurityEvent',
    'EventLogger',
    'get_key_fingerprint',
    'create_event_logger',
]
