from __future__ import annotations

from typing import Iterable, List

import pandas as pd

from .fixed_point import TOKEN_DECIMALS, from_fixed
from .models import AdjustmentRecord

TOKEN_UNIT = 10**TOKEN_DECIMALS


def load_schedule(path: str) -> List[int]:
    """Read call times (seconds) from the ``timestamp`` column of a CSV file."""
    df = pd.read_csv(path)
    if "timestamp" not in df.columns:
        raise ValueError(f"{path} has no 'timestamp' column (found {list(df.columns)})")
    return [int(value) for value in df["timestamp"].dropna().sort_values()]


def records_to_frame(records: Iterable[AdjustmentRecord]) -> pd.DataFrame:
    records = list(records)
    # Amounts are kept as strings; they overflow int64
    return pd.DataFrame(
        {
            "timestamp": [r.timestamp for r in records],
            "direction": [r.direction.value for r in records],
            "amount": [str(r.amount) for r in records],
            "raw_amount": [str(r.raw_amount) for r in records],
            "balance_before": [str(r.balance_before) for r in records],
            "balance_after": [str(r.balance_after) for r in records],
            "total_supply_after": [str(r.total_supply_after) for r in records],
            "elapsed_seconds": [r.elapsed_seconds for r in records],
            "strategy": [r.strategy for r in records],
            "bridge_transaction_id": [r.bridge_transaction_id for r in records],
        }
    )


def format_record(record: AdjustmentRecord) -> str:
    amount = from_fixed(record.amount, TOKEN_UNIT)
    before = from_fixed(record.balance_before, TOKEN_UNIT)
    after = from_fixed(record.balance_after, TOKEN_UNIT)
    return (
        f"t={record.timestamp} | {record.direction.value} {amount:.6f} "
        f"after {record.elapsed_seconds}s | pool {before:.6f} -> {after:.6f}"
    )


def format_records(records: List[AdjustmentRecord]) -> str:
    return "\n".join(format_record(record) for record in records)
