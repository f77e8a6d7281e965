from __future__ import annotations

import pytest

from supply_issuance.collaborators import (
    BURN_ROLE,
    MINT_ROLE,
    UPDATE_SETTINGS_ROLE,
    InMemoryToken,
    InMemoryTokenManager,
    ManualClock,
    RoleAuthorizer,
    VaultFundsManager,
)
from supply_issuance.config import IssuanceConfig
from supply_issuance.controller import RECORD_HISTORY, initialize

from .helpers import APP_MANAGER, HOLDER, INITIAL_TARGET_RATIO, ISSUANCE, START, TOTAL_SUPPLY, VAULT


@pytest.fixture
def clock():
    return ManualClock(START)


@pytest.fixture
def authorizer():
    acl = RoleAuthorizer()
    acl.grant(ISSUANCE, MINT_ROLE)
    acl.grant(ISSUANCE, BURN_ROLE)
    acl.grant(APP_MANAGER, UPDATE_SETTINGS_ROLE)
    return acl


@pytest.fixture
def make_controller(clock, authorizer):
    """Factory for a controller whose vault holds ``pool_balance`` of ``total_supply``."""

    def _make(pool_balance, config=None, total_supply=TOTAL_SUPPLY, transport=None, wrap_token_manager=None, record_history=RECORD_HISTORY):
        token = InMemoryToken()
        manager = InMemoryTokenManager(token, authorizer, operator=ISSUANCE)
        manager.mint(HOLDER, total_supply)
        token.transfer(HOLDER, VAULT, pool_balance)
        if wrap_token_manager is not None:
            manager = wrap_token_manager(manager)
        return initialize(
            manager,
            VaultFundsManager(VAULT, token),
            token,
            config or IssuanceConfig(target_ratio=INITIAL_TARGET_RATIO),
            authorizer=authorizer,
            clock=clock,
            transport=transport,
            record_history=record_history,
        )

    return _make
