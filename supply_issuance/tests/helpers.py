from __future__ import annotations

TOKEN = 10**18
TOTAL_SUPPLY = 100 * TOKEN
INITIAL_TARGET_RATIO = 2 * 10**17  # 0.2
APP_MANAGER = "app_manager"
USER = "user"
ISSUANCE = "issuance"
HOLDER = "holder"
VAULT = "vault"
START = 1_600_000_000
