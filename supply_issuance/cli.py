from __future__ import annotations

import argparse
import logging
from typing import Iterable, List, Optional

from .bridge import RecordingTransport
from .collaborators import (
    ANY_ENTITY,
    BURN_ROLE,
    MINT_ROLE,
    UPDATE_SETTINGS_ROLE,
    InMemoryToken,
    InMemoryTokenManager,
    ManualClock,
    RoleAuthorizer,
    VaultFundsManager,
)
from .config import IssuanceConfig
from .controller import IssuanceController, initialize
from .data import TOKEN_UNIT, format_record, load_schedule, records_to_frame
from .fixed_point import EXTRA_PRECISION, RATIO_PRECISION, to_fixed
from .models import AdjustmentRecord
from .scheduler import AdjustmentScheduler, build_schedule
from .strategies import DEFAULT_STRATEGY, STRATEGY_REGISTRY, available_strategies

HOLDER = "holder"
VAULT = "vault"
ISSUANCE = "issuance"


def build_simulation(
    config: IssuanceConfig,
    total_supply: int,
    pool_balance: int,
    clock: ManualClock,
) -> IssuanceController:
    """Wire a controller to in-memory collaborators holding the given balances."""
    authorizer = RoleAuthorizer()
    for role in (MINT_ROLE, BURN_ROLE, UPDATE_SETTINGS_ROLE):
        authorizer.grant(ANY_ENTITY, role)

    token = InMemoryToken()
    token_manager = InMemoryTokenManager(token, authorizer, operator=ISSUANCE)
    token_manager.mint(HOLDER, total_supply)
    token.transfer(HOLDER, VAULT, pool_balance)

    transport = RecordingTransport() if config.bridge_destination else None
    return initialize(
        token_manager,
        VaultFundsManager(VAULT, token),
        token,
        config,
        authorizer=authorizer,
        clock=clock,
        transport=transport,
    )


def run_simulation(
    config: IssuanceConfig,
    total_supply: int,
    pool_balance: int,
    timestamps: Iterable[int],
    output: str | None = None,
) -> List[AdjustmentRecord]:
    clock = ManualClock(0)
    controller = build_simulation(config, total_supply, pool_balance, clock)
    records = AdjustmentScheduler(controller, clock).run(timestamps)

    if output:
        records_to_frame(records).to_csv(output, index=False)

    return records


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Simulate periodic supply adjustments of a common pool toward a target ratio."
    )
    parser.add_argument("--total-supply", default="100", help="Initial token supply, in whole tokens")
    parser.add_argument("--pool-balance", default="30", help="Initial common pool balance, in whole tokens")
    parser.add_argument("--target-ratio", default="0.2", help="Target pool share of total supply (0-1)")
    parser.add_argument(
        "--max-adjustment-per-second",
        default="0.000001",
        help="Cap on the adjusted fraction of supply per second",
    )
    parser.add_argument("--recovery-time", type=int, default=IssuanceConfig.recovery_time, help="Seconds, recovery_time strategy")
    parser.add_argument("--delay", type=int, default=0, help="Minimum seconds between executions")
    parser.add_argument(
        "--strategy",
        default=DEFAULT_STRATEGY,
        choices=available_strategies(),
        help="Convergence strategy to execute",
    )
    parser.add_argument("--days", type=int, default=30, help="Length of the simulated period")
    parser.add_argument("--interval", type=int, default=86_400, help="Seconds between scheduled calls")
    parser.add_argument("--schedule", help="Optional CSV with a 'timestamp' column of call times")
    parser.add_argument("--bridge-destination", help="Notify this counterpart domain of every adjustment")
    parser.add_argument("--output", help="Optional path to save adjustment records as CSV")
    parser.add_argument(
        "--list-strategies",
        action="store_true",
        help="List available strategies and exit",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    return parser


def config_from_args(args: argparse.Namespace) -> IssuanceConfig:
    return IssuanceConfig(
        target_ratio=to_fixed(args.target_ratio, RATIO_PRECISION),
        max_adjustment_per_second=to_fixed(args.max_adjustment_per_second, EXTRA_PRECISION),
        execute_adjustment_delay=args.delay,
        recovery_time=args.recovery_time,
        strategy=args.strategy,
        bridge_destination=args.bridge_destination,
    ).validate()


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = build_arg_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list_strategies:
        print("Available strategies:")
        for name in available_strategies():
            print(f"- {name}: {STRATEGY_REGISTRY[name].description}")
        return

    config = config_from_args(args)
    if args.schedule:
        timestamps = load_schedule(args.schedule)
    else:
        timestamps = build_schedule(0, args.days, args.interval)

    records = run_simulation(
        config,
        to_fixed(args.total_supply, TOKEN_UNIT),
        to_fixed(args.pool_balance, TOKEN_UNIT),
        timestamps,
        args.output,
    )
    if not records:
        print("No adjustments executed for the provided schedule.")
        return

    for record in records:
        print(format_record(record))


__all__ = ["main", "run_simulation", "build_simulation", "build_arg_parser", "config_from_args"]
