"""Per-index transfer amounts, in wei."""

import random
from decimal import ROUND_CEILING, Decimal, InvalidOperation
from typing import Mapping, Optional, Protocol, Union

from web3 import Web3

from .errors import ConfigurationError

Number = Union[str, int, float, Decimal]

NATIVE_DECIMALS = 18
RANDOM_AMOUNT_PRECISION = 6

_STEP_WEI = 10 ** (NATIVE_DECIMALS - RANDOM_AMOUNT_PRECISION)


class AmountGenerator(Protocol):
    def amount_for(self, index: int) -> int:
        ...


class FixedAmount:
    """Same amount for every index."""

    def __init__(self, value: Number) -> None:
        self.value = _to_decimal(value, "amount")
        if self.value <= 0:
            raise ConfigurationError(f"Amount must be positive, got {value}")
        try:
            self._wei = int(Web3.to_wei(self.value, "ether"))
        except ValueError as exc:
            raise ConfigurationError(f"Invalid amount {value}: {exc}") from None
        if self._wei <= 0:
            raise ConfigurationError(f"Amount {value} is smaller than 1 wei")

    def amount_for(self, index: int) -> int:
        return self._wei

    def __repr__(self) -> str:
        return f"FixedAmount({self.value})"


class RandomAmount:
    """Independent uniform draw from ``[minimum, maximum)`` per index.

    Draws land on the 6-decimal grid so the scaled value carries no
    fractional noise; the largest possible draw is one grid step below
    ``maximum``.
    """

    def __init__(
        self,
        minimum: Number,
        maximum: Number,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.minimum = _to_decimal(minimum, "minimum amount")
        self.maximum = _to_decimal(maximum, "maximum amount")
        if self.minimum <= 0:
            raise ConfigurationError(f"Minimum amount must be positive, got {minimum}")
        if self.maximum <= self.minimum:
            raise ConfigurationError(
                f"Maximum amount ({maximum}) must be greater than minimum ({minimum})"
            )

        self._low = _to_steps(self.minimum)
        self._high = _to_steps(self.maximum)
        if self._high <= self._low:
            raise ConfigurationError(
                f"No {RANDOM_AMOUNT_PRECISION}-decimal amount lies in "
                f"[{minimum}, {maximum})"
            )
        self._rng = rng or random.Random()

    def amount_for(self, index: int) -> int:
        return self._rng.randrange(self._low, self._high) * _STEP_WEI

    def __repr__(self) -> str:
        return f"RandomAmount({self.minimum}, {self.maximum})"


def amount_generator_from_policy(
    policy: Mapping[str, object], rng: Optional[random.Random] = None
) -> AmountGenerator:
    """Build a generator from ``{"mode": "fixed", "value": ...}`` or
    ``{"mode": "random", "min": ..., "max": ...}``."""
    mode = str(policy.get("mode", "")).lower()
    if mode == "fixed":
        if policy.get("value") is None:
            raise ConfigurationError("Fixed amount mode requires a value")
        return FixedAmount(policy["value"])
    if mode == "random":
        if policy.get("min") is None or policy.get("max") is None:
            raise ConfigurationError("Random amount mode requires min and max")
        return RandomAmount(policy["min"], policy["max"], rng=rng)
    raise ConfigurationError(f"Unknown amount mode: {policy.get('mode')!r}")


def to_ether(amount_wei: int) -> Decimal:
    return Web3.from_wei(amount_wei, "ether")


def _to_decimal(value: Number, name: str) -> Decimal:
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ConfigurationError(f"Invalid {name}: {value!r}") from None
    if not number.is_finite():
        raise ConfigurationError(f"Invalid {name}: {value!r}")
    return number


def _to_steps(value: Decimal) -> int:
    scaled = value.scaleb(RANDOM_AMOUNT_PRECISION)
    return int(scaled.to_integral_value(rounding=ROUND_CEILING))
