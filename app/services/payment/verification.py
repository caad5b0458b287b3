"""
Crypto verification port.

The lifecycle asks a decision function whether a transaction hash checks out.
The default implementation simulates chain lookup latency outcomes with a
configured success probability; a real chain lookup plugs in the same way.
"""

import random
from typing import Protocol

from app.models.payment import Payment


class VerificationDecision(Protocol):
    def __call__(self, payment: Payment) -> bool: ...


class RandomVerificationDecision:
    """
    Simulated verifier.

    Args:
        success_rate: Probability of success (0..1)
        rng: Random source, injectable for deterministic runs
    """

    def __init__(self, success_rate: float, rng: random.Random | None = None) -> None:
        self.success_rate = success_rate
        self.rng = rng or random.Random()

    def __call__(self, payment: Payment) -> bool:
        return self.rng.random() < self.success_rate


def always_verified(payment: Payment) -> bool:
    return True


def never_verified(payment: Payment) -> bool:
    return False
