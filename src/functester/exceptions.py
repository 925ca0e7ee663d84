"""Exception hierarchy for functester."""


class FuncTesterError(Exception):
    """Base exception for functester."""


class ConstructionError(FuncTesterError, TypeError):
    """Harness cannot be constructed (abstract core or missing test_suite)."""


class HarnessConfigError(FuncTesterError, ValueError):
    """Parameter specs, combination keys or observations are inconsistent."""


class HarnessError(FuncTesterError):
    """Harness used outside of plan construction."""


class ConfigError(FuncTesterError):
    """Invalid or missing runner configuration."""


class InvalidCombinationKeyError(HarnessConfigError):
    """Combination key is malformed or references an unknown parameter."""

    def __init__(self, key: str, reason: str):
        super().__init__(f"Invalid combination key {key!r}: {reason}")
        self.key = key
        self.reason = reason
