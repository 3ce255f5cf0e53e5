"""Exception hierarchy for calchub."""

from __future__ import annotations


class CalchubError(Exception):
    """Base class for all calchub errors."""


class NotFoundError(CalchubError, LookupError):
    """A calculator or country key does not exist."""

    def __init__(self, kind: str, key: str) -> None:
        super().__init__(f"{kind} {key!r} not found")
        self.kind = kind
        self.key = key


class CalculatorNotFoundError(NotFoundError):
    def __init__(self, calculator_id: str) -> None:
        super().__init__("Calculator", calculator_id)


class CountryNotFoundError(NotFoundError):
    def __init__(self, country_code: str) -> None:
        super().__init__("Country", country_code)


class RegistrationError(CalchubError):
    """A calculator definition is inconsistent with its compute function."""


class ProviderError(CalchubError):
    """One exchange-rate provider failed; the client moves on to the next."""

    def __init__(self, provider: str, reason: str) -> None:
        super().__init__(f"{provider}: {reason}")
        self.provider = provider
        self.reason = reason
