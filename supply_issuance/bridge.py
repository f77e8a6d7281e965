"""Cross-domain notification of supply adjustments.

A counterpart domain mirrors the pool accounting, so every non-zero
adjustment is forwarded as a signed delta (positive = minted,
negative = burned) through an abstract transport.
"""
from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from .errors import BridgeError

logger = logging.getLogger(__name__)

MESSAGE_TYPE = "supply_adjustment"


def encode_adjustment_message(delta: int, timestamp: int) -> bytes:
    # Amounts exceed JSON's safe integer range, so they travel as strings
    payload = {"type": MESSAGE_TYPE, "delta": str(delta), "timestamp": timestamp}
    return json.dumps(payload, sort_keys=True).encode("utf-8")


def decode_adjustment_message(payload: bytes) -> Tuple[int, int]:
    try:
        message = json.loads(payload.decode("utf-8"))
        if message["type"] != MESSAGE_TYPE:
            raise BridgeError(f"unexpected message type {message['type']!r}")
        return int(message["delta"]), int(message["timestamp"])
    except (UnicodeDecodeError, ValueError, KeyError, TypeError) as exc:
        raise BridgeError(f"malformed adjustment message: {payload!r}") from exc


class BridgeTransport(ABC):
    """Delivers an encoded message to a destination and returns its transaction id."""

    @abstractmethod
    def send(self, destination: str, payload: bytes) -> Optional[str]:
        ...


class NullTransport(BridgeTransport):
    def send(self, destination: str, payload: bytes) -> Optional[str]:
        return None


class RecordingTransport(BridgeTransport):
    """In-memory transport that keeps every message it was asked to send."""

    def __init__(self, prefix: str = "tx"):
        self.prefix = prefix
        self.sent: List[Tuple[str, bytes]] = []

    def send(self, destination: str, payload: bytes) -> Optional[str]:
        self.sent.append((destination, payload))
        return f"{self.prefix}-{len(self.sent)}"

    def deltas(self) -> List[int]:
        return [decode_adjustment_message(payload)[0] for _, payload in self.sent]


class BridgeNotifier:
    def __init__(self, transport: BridgeTransport | None = None):
        self.transport = transport or NullTransport()

    def notify(self, destination: Optional[str], delta: int, timestamp: int) -> Optional[str]:
        if destination is None or delta == 0:
            return None

        payload = encode_adjustment_message(delta, timestamp)
        try:
            transaction_id = self.transport.send(destination, payload)
        except BridgeError:
            raise
        except Exception as exc:
            raise BridgeError(f"failed to notify {destination} of delta {delta}") from exc

        logger.info("Bridged delta %s to %s (tx %s)", delta, destination, transaction_id)
        return transaction_id
