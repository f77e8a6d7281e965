"""Boundaries to the systems the controller drives, plus in-memory stand-ins.

The protocols describe the only calls the controller makes. The in-memory
classes implement them for simulation and tests.
"""
from __future__ import annotations

import time
from typing import Dict, Protocol, Set

from .errors import AuthorizationFailed, ConfigValidationError
from .fixed_point import checked_add, checked_sub

ANY_ENTITY = "*"
UPDATE_SETTINGS_ROLE = "UPDATE_SETTINGS_ROLE"
MINT_ROLE = "MINT_ROLE"
BURN_ROLE = "BURN_ROLE"


class TokenLedger(Protocol):
    def balance_of(self, holder: str) -> int: ...

    def total_supply(self) -> int: ...


class TokenManager(Protocol):
    def mint(self, holder: str, amount: int) -> None: ...

    def burn(self, holder: str, amount: int) -> None: ...


class FundsManager(Protocol):
    def funds_owner(self) -> str: ...

    def balance(self) -> int: ...


class Authorizer(Protocol):
    def require(self, caller: object, action: str) -> None: ...


class Clock(Protocol):
    def now(self) -> int: ...


class RoleAuthorizer:
    """Access list mapping roles to the entities holding them."""

    def __init__(self):
        self._grants: Dict[str, Set[object]] = {}

    def grant(self, entity: object, role: str) -> None:
        self._grants.setdefault(role, set()).add(entity)

    def revoke(self, entity: object, role: str) -> None:
        self._grants.get(role, set()).discard(entity)

    def has(self, entity: object, role: str) -> bool:
        holders = self._grants.get(role, set())
        return ANY_ENTITY in holders or entity in holders

    def require(self, caller: object, action: str) -> None:
        if not self.has(caller, action):
            raise AuthorizationFailed(caller, action)


class InMemoryToken:
    """Minimal ledger: balances and total supply, changed by the token manager."""

    def __init__(self, symbol: str = "HNY", decimals: int = 18):
        self.symbol = symbol
        self.decimals = decimals
        self._balances: Dict[str, int] = {}
        self._total_supply = 0

    def balance_of(self, holder: str) -> int:
        return self._balances.get(holder, 0)

    def total_supply(self) -> int:
        return self._total_supply

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        self._balances[sender] = checked_sub(self.balance_of(sender), amount)
        self._balances[recipient] = checked_add(self.balance_of(recipient), amount)

    def generate(self, holder: str, amount: int) -> None:
        supply = checked_add(self._total_supply, amount)
        self._balances[holder] = checked_add(self.balance_of(holder), amount)
        self._total_supply = supply

    def destroy(self, holder: str, amount: int) -> None:
        balance = checked_sub(self.balance_of(holder), amount)
        self._total_supply = checked_sub(self._total_supply, amount)
        self._balances[holder] = balance


class InMemoryTokenManager:
    """Mints and burns on behalf of ``operator`` if it holds the matching role."""

    def __init__(self, token: InMemoryToken, authorizer: RoleAuthorizer, operator: object):
        self.token = token
        self.authorizer = authorizer
        self.operator = operator

    def mint(self, holder: str, amount: int) -> None:
        self.authorizer.require(self.operator, MINT_ROLE)
        self.token.generate(holder, amount)

    def burn(self, holder: str, amount: int) -> None:
        self.authorizer.require(self.operator, BURN_ROLE)
        self.token.destroy(holder, amount)


class VaultFundsManager:
    """Custody of the common pool; the vault address is the pool."""

    def __init__(self, vault: str, token: TokenLedger):
        if not vault:
            raise ConfigValidationError("vault address must not be empty")
        self.vault = vault
        self.token = token

    def funds_owner(self) -> str:
        return self.vault

    def balance(self) -> int:
        return self.token.balance_of(self.vault)


class SystemClock:
    def now(self) -> int:
        return int(time.time())


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: int = 0):
        self._now = start

    def now(self) -> int:
        return self._now

    def advance(self, seconds: int) -> int:
        if seconds < 0:
            raise ValueError(f"cannot move the clock backwards by {seconds}s")
        self._now += seconds
        return self._now

    def set(self, timestamp: int) -> int:
        if timestamp < self._now:
            raise ValueError(f"cannot move the clock back from {self._now} to {timestamp}")
        self._now = timestamp
        return self._now
