from __future__ import annotations

from dataclasses import dataclass

from .models import PoolSnapshot
from .ratio import target_amount as compute_target_amount


@dataclass(frozen=True)
class GuardDecision:
    amount: int  # signed: positive mint, negative burn
    target_amount: int
    clamped: bool


def clamp_to_target(signed_amount: int, balance: int, target_amount: int) -> int:
    """Shrink ``signed_amount`` so that ``balance`` never moves past ``target_amount``."""
    if signed_amount > 0:
        room = max(target_amount - balance, 0)
        return min(signed_amount, room)
    if signed_amount < 0:
        room = max(balance - target_amount, 0)
        return -min(-signed_amount, room)
    return 0


class OvershootGuard:
    """Keeps a single adjustment from crossing the target balance."""

    def __init__(self, target_ratio: int):
        self.target_ratio = target_ratio

    def apply(self, signed_amount: int, snapshot: PoolSnapshot) -> GuardDecision:
        target = compute_target_amount(snapshot.token_total_supply, self.target_ratio)
        amount = clamp_to_target(signed_amount, snapshot.common_pool_balance, target)
        return GuardDecision(amount=amount, target_amount=target, clamped=amount != signed_amount)
