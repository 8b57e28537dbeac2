from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CheckoutError(Exception):
    message: str

    def __str__(self) -> str:  # pragma: no cover
        return self.message


@dataclass(frozen=True)
class ValidationError(CheckoutError):
    pass


@dataclass(frozen=True)
class CustomerNotFound(CheckoutError):
    customer_id: str

    def __str__(self) -> str:  # pragma: no cover
        return f"customer_not_found: {self.customer_id} ({self.message})"


@dataclass(frozen=True)
class PaymentDeclined(CheckoutError):
    reason: str

    def __str__(self) -> str:  # pragma: no cover
        return f"payment_declined: {self.reason} ({self.message})"


@dataclass(frozen=True)
class InvoicingError(CheckoutError):
    pass


@dataclass(frozen=True)
class CardDecryptionError(CheckoutError):
    pass


@dataclass(frozen=True)
class StageAlreadyRecorded(CheckoutError):
    """Raised when a second outcome is recorded for the same stage."""

    stage: str

    def __str__(self) -> str:  # pragma: no cover
        return f"stage_already_recorded: {self.stage} ({self.message})"
