"""
Payment services package.

Contains the activation payment engine:
- transitions: allowed status moves of a payment slot
- issuer: issue of the eight slots of a new participant
- verification: crypto verification decision port
- lifecycle: submit / confirm / reject / auto-verify
- expiry: periodic payment and confirmation expiry sweeps
- disputes: admin dispute resolution
"""

from app.services.payment.disputes import DisputeService
from app.services.payment.expiry import PaymentExpiryService
from app.services.payment.issuer import issue_payments
from app.services.payment.lifecycle import PaymentLifecycleService
from app.services.payment.transitions import ALLOWED, can_transition, reissue, transition
from app.services.payment.verification import (
    RandomVerificationDecision,
    VerificationDecision,
    always_verified,
    never_verified,
)


__all__ = [
    # State machine
    "ALLOWED",
    "can_transition",
    "reissue",
    "transition",
    # Services
    "DisputeService",
    "PaymentExpiryService",
    "PaymentLifecycleService",
    "issue_payments",
    # Verification
    "RandomVerificationDecision",
    "VerificationDecision",
    "always_verified",
    "never_verified",
]
