from __future__ import annotations


class IssuanceError(Exception):
    """Base class for every failure raised by the issuance controller."""


class ConfigValidationError(IssuanceError, ValueError):
    """A configuration value is outside its allowed bounds."""


class DivideByZero(IssuanceError, ZeroDivisionError):
    """A division had a zero denominator (usually a zero total supply)."""


class ArithmeticOverflow(IssuanceError, OverflowError):
    """An intermediate value left the unsigned 256-bit range."""


class DelayNotPassed(IssuanceError):
    """The minimum interval since the last adjustment has not elapsed."""

    def __init__(self, elapsed: int, required: int):
        super().__init__(f"Adjustment delay not passed: {elapsed}s elapsed, {required}s required")
        self.elapsed = elapsed
        self.required = required


class AuthorizationFailed(IssuanceError, PermissionError):
    """The caller lacks the capability for the requested action."""

    def __init__(self, caller: object, action: str):
        super().__init__(f"{caller!r} is not allowed to perform {action}")
        self.caller = caller
        self.action = action


class ReentrantCall(IssuanceError):
    """execute_adjustment was entered again before the running call finished."""


class BridgeError(IssuanceError):
    """The bridge transport failed to deliver an adjustment notification."""


class UnknownStrategyError(IssuanceError, ValueError):
    """No convergence strategy is registered under the requested name."""
