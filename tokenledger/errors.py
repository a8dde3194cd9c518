"""
tokenledger.errors — typed failures raised by ledger operations.

Every operation communicates failure by raising one of the exceptions below;
nothing ever signals failure by returning ``False``. Hosts convert these into
receipts or RPC error payloads using :func:`error_to_receipt_fields`.

Hierarchy
---------
LedgerError (base)
 ├─ NullAccount          : unset sender/recipient/owner/spender in a mutating call
 ├─ InsufficientBalance  : debit exceeds balance on transfer/burn
 ├─ AllowanceExceeded    : spend or burn exceeds an approved allowance
 ├─ AllowanceUnderflow   : decrease_allowance subtrahend exceeds the allowance
 ├─ CapExceeded          : mint would breach the supply cap
 ├─ InvalidAmount        : value is not an int in [0, max_amount]
 ├─ AmountOverflow       : checked add exceeded max_amount
 ├─ AmountUnderflow      : checked subtract went below zero
 ├─ InvalidMetadata      : bad token name/symbol/cap at construction
 └─ LedgerCorrupted      : an invariant check found inconsistent state

These classes import nothing from the rest of the package so every module can
use them without cycles.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LedgerError(Exception):
    """
    Base ledger error.

    Attributes:
        message: Human-readable explanation.
        code:    Stable machine code string (e.g. 'INSUFFICIENT_BALANCE').
        data:    Optional structured details (kept JSON-serializable).
    """
    message: str = "ledger error"
    code: str = "LEDGER_ERROR"
    data: Optional[Dict[str, Any]] = field(default=None)

    def __str__(self) -> str:  # pragma: no cover - trivial
        if self.data:
            return f"{self.code}: {self.message} ({self.data})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-safe dict for receipts/logs/RPC errors."""
        out: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            out["data"] = self.data
        return out


def _details(data: Optional[Dict[str, Any]], **fields: Any) -> Optional[Dict[str, Any]]:
    d: Dict[str, Any] = {}
    if data:
        d.update(data)
    for k, v in fields.items():
        if v is not None:
            d.setdefault(k, v)
    return d or None


class NullAccount(LedgerError):
    """
    An account argument of a mutating call was unset.

    `role` names the offending parameter ("sender", "recipient", "owner",
    "spender", "account").
    """
    def __init__(
        self,
        message: str = "null account",
        *,
        role: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, code="NULL_ACCOUNT", data=_details(data, role=role))


class InsufficientBalance(LedgerError):
    def __init__(
        self,
        message: str = "amount exceeds balance",
        *,
        balance: Optional[int] = None,
        amount: Optional[int] = None,
        data: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            code="INSUFFICIENT_BALANCE",
            data=_details(data, balance=balance, amount=amount),
        )


class AllowanceExceeded(LedgerError):
    def __init__(
        self,
        message: str = "amount exceeds allowance",
        *,
        allowance: Optional[int] = None,
        amount: Optional[int] = None,
        data: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            code="ALLOWANCE_EXCEEDED",
            data=_details(data, allowance=allowance, amount=amount),
        )


class AllowanceUnderflow(LedgerError):
    def __init__(
        self,
        message: str = "decreased allowance below zero",
        *,
        allowance: Optional[int] = None,
        amount: Optional[int] = None,
        data: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            code="ALLOWANCE_UNDERFLOW",
            data=_details(data, allowance=allowance, amount=amount),
        )


class CapExceeded(LedgerError):
    def __init__(
        self,
        message: str = "cap exceeded",
        *,
        cap: Optional[int] = None,
        total_supply: Optional[int] = None,
        amount: Optional[int] = None,
        data: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            code="CAP_EXCEEDED",
            data=_details(data, cap=cap, total_supply=total_supply, amount=amount),
        )


class InvalidAmount(LedgerError):
    def __init__(self, message: str = "invalid amount", *, data: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="INVALID_AMOUNT", data=data)


class AmountOverflow(LedgerError):
    def __init__(self, message: str = "amount overflow", *, data: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="AMOUNT_OVERFLOW", data=data)


class AmountUnderflow(LedgerError):
    def __init__(self, message: str = "amount underflow", *, data: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="AMOUNT_UNDERFLOW", data=data)


class InvalidMetadata(LedgerError):
    def __init__(
        self,
        message: str = "invalid token metadata",
        *,
        field_name: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message, code="INVALID_METADATA", data=_details(data, field=field_name)
        )


class LedgerCorrupted(LedgerError):
    """Raised by explicit invariant checks; never part of normal operation."""
    def __init__(self, message: str = "ledger invariant violated", *, data: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="LEDGER_CORRUPTED", data=data)


# -------- helper utilities ---------------------------------------------------


def error_to_receipt_fields(err: LedgerError) -> Dict[str, Any]:
    """
    Map a LedgerError to receipt-like fields for the host.

    Returns:
        {
          "status": "REVERT" | "ERROR",
          "error":  {code, message, data?}
        }

    Corruption is reported as ERROR (a bug), everything else as a plain revert.
    """
    status = "ERROR" if isinstance(err, LedgerCorrupted) else "REVERT"
    return {"status": status, "error": err.to_dict()}


__all__ = [
    "LedgerError",
    "NullAccount",
    "InsufficientBalance",
    "AllowanceExceeded",
    "AllowanceUnderflow",
    "CapExceeded",
    "InvalidAmount",
    "AmountOverflow",
    "AmountUnderflow",
    "InvalidMetadata",
    "LedgerCorrupted",
    "error_to_receipt_fields",
]
