"""
Event Logger Module

Audit trail for sealing and opening messages.

Features:
- Seal, open and rejection events
- Peers identified by public-key fingerprints, never by key bytes
- Rejections carry only the error kind
- Events mirrored to the stdlib ``sealedtext.audit`` logger

Nothing recorded here may contain a salt, key, shared secret or plaintext.
"""

import hashlib
import json
import logging
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict, Any, Callable

from cryptography.hazmat.primitives import serialization

from ..core_crypto.key_agreement import load_public_key
from ..errors import SealError


logger = logging.getLogger("sealedtext.audit")

EVENT_VERSION = "1.0"
FINGERPRINT_LENGTH = 16


def get_key_fingerprint(public_key) -> str:
    """
    Short identifier for a public key.

    First 16 hex chars of SHA-256 over the uncompressed X9.62 point. Lets
    events for the same peer be correlated without storing the key.
    """
    key = load_public_key(public_key)
    point = key.public_bytes(
        encoding=serialization.Encoding.X962,
        format=serialization.PublicFormat.UncompressedPoint
    )
    return hashlib.sha256(point).hexdigest()[:FINGERPRINT_LENGTH]


class EventType(Enum):
    """Types of security events that can be logged."""
    MESSAGE_SEAL = "message_seal"
    MESSAGE_OPEN = "message_open"
    MESSAGE_REJECTED = "message_rejected"


@dataclass
class SecurityEvent:
    """A single audit record."""
    event_type: EventType
    peer_hash: str
    timestamp: int
    details: Dict[str, Any] = field(default_factory=dict)

    def to_record(self) -> str:
        """Compact JSON representation."""
        return json.dumps({
            'version': EVENT_VERSION,
            'type': self.event_type.value,
            'peer': self.peer_hash,
            'time': self.timestamp,
            'details': self.details,
        }, separators=(',', ':'))

    @classmethod
    def from_record(cls, record: str) -> 'SecurityEvent':
        data = json.loads(record)
        return cls(
            event_type=EventType(data['type']),
            peer_hash=data['peer'],
            timestamp=data['time'],
            details=data.get('details', {}),
        )

    def __str__(self) -> str:
        dt = datetime.fromtimestamp(self.timestamp)
        return (
            f"[{dt.strftime('%Y-%m-%d %H:%M:%S')}] "
            f"{self.event_type.value} | "
            f"peer:{self.peer_hash[:8]}..."
        )


class EventLogger:
    """
    In-memory audit log.

    Safe to share between threads; a lock guards the event list and the
    callback list.
    """

    def __init__(self, max_events: Optional[int] = None):
        """
        Args:
            max_events: Keep only the newest N events (unbounded if None)
        """
        self._events: List[SecurityEvent] = []
        self._callbacks: List[Callable[[SecurityEvent], None]] = []
        self._max_events = max_events
        self._lock = threading.Lock()

    def _add_event(self, event: SecurityEvent) -> None:
        with self._lock:
            self._events.append(event)
            if self._max_events is not None and len(self._events) > self._max_events:
                del self._events[:len(self._events) - self._max_events]
            callbacks = list(self._callbacks)

        level = logging.WARNING if event.event_type is EventType.MESSAGE_REJECTED else logging.INFO
        logger.log(level, "%s", event.to_record())

        for callback in callbacks:
            try:
                callback(event)
            except Exception:
                logger.exception("audit callback failed")

    def add_callback(self, callback: Callable[[SecurityEvent], None]) -> None:
        """Add a callback to be notified of new events."""
        with self._lock:
            self._callbacks.append(callback)

    def remove_callback(self, callback: Callable[[SecurityEvent], None]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    # ========================================================================
    # Protocol Events
    # ========================================================================

    def log_seal(self, peer_public_key, blob_size: int,
                 algorithm: str = "AES-GCM") -> SecurityEvent:
        """
        Log a sealed message.

        Args:
            peer_public_key: Recipient public key (fingerprinted)
            blob_size: Size of the combined blob in bytes
            algorithm: Cipher name

        Returns:
            The logged event
        """
        event = SecurityEvent(
            event_type=EventType.MESSAGE_SEAL,
            peer_hash=get_key_fingerprint(peer_public_key),
            timestamp=int(time.time()),
            details={'size': blob_size, 'algo': algorithm},
        )
        self._add_event(event)
        return event

    def log_open(self, peer_public_key, blob_size: int) -> SecurityEvent:
        """Log a successfully opened message."""
        event = SecurityEvent(
            event_type=EventType.MESSAGE_OPEN,
            peer_hash=get_key_fingerprint(peer_public_key),
            timestamp=int(time.time()),
            details={'size': blob_size},
        )
        self._add_event(event)
        return event

    def log_rejected(self, peer_public_key, operation: str, kind: str) -> SecurityEvent:
        """
        Log a failed seal or open.

        The peer key may itself be the invalid input; it is then recorded
        as "unknown".
        """
        try:
            peer_hash = get_key_fingerprint(peer_public_key)
        except (SealError, TypeError):
            peer_hash = "unknown"
        event = SecurityEvent(
            event_type=EventType.MESSAGE_REJECTED,
            peer_hash=peer_hash,
            timestamp=int(time.time()),
            details={'op': operation, 'kind': kind},
        )
        self._add_event(event)
        return event

    # ========================================================================
    # Queries
    # ========================================================================

    def get_all_events(self) -> List[SecurityEvent]:
        with self._lock:
            return list(self._events)

    def get_events_by_type(self, event_type: EventType) -> List[SecurityEvent]:
        return [e for e in self.get_all_events() if e.event_type == event_type]

    def get_peer_events(self, peer_public_key) -> List[SecurityEvent]:
        """Get all events recorded against one peer key."""
        peer_hash = get_key_fingerprint(peer_public_key)
        return [e for e in self.get_all_events() if e.peer_hash == peer_hash]

    def get_recent_events(self, count: int = 10) -> List[SecurityEvent]:
        if count <= 0:
            return []
        return self.get_all_events()[-count:]

    def print_audit_log(self, last_n: Optional[int] = None) -> None:
        """Print the audit log in human-readable form."""
        events = self.get_all_events()
        if last_n is not None:
            events = events[-last_n:] if last_n > 0 else []

        print("=" * 60)
        print("SECURITY AUDIT LOG")
        print("=" * 60)
        for event in events:
            print(event)
            if event.details:
                print(f"    details: {event.details}")
        print("=" * 60)
        print(f"Total events: {len(events)}")

    def export_log(self) -> str:
        """Export events as JSON lines."""
        return "\n".join(e.to_record() for e in self.get_all_events())

    @classmethod
    def import_log(cls, data: str) -> 'EventLogger':
        """Rebuild a logger from export_log output."""
        event_logger = cls()
        for line in data.splitlines():
            if line.strip():
                event_logger._events.append(SecurityEvent.from_record(line))
        return event_logger


def create_event_logger(max_events: Optional[int] = None) -> EventLogger:
    """Create a new event logger."""
    return EventLogger(max_events=max_events)
