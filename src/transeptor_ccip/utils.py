"""Utility functions for the Transeptor CCIP tasks."""

from collections.abc import Mapping, Sequence
from typing import Any

from hexbytes import HexBytes
from web3 import Web3
from web3.types import ChecksumAddress

from .exceptions import ConfigurationError, ValidationError
from .types import PayFeesIn


def parse_pay_fees_in(value: str | PayFeesIn) -> PayFeesIn:
    """Map the exact 'Native' or 'LINK' task option onto :class:`PayFeesIn`."""
    if isinstance(value, PayFeesIn):
        return value

    if value == "Native":
        return PayFeesIn.NATIVE
    elif value == "LINK":
        return PayFeesIn.LINK
    else:
        raise ConfigurationError(
            f"Invalid payFeesIn value: {value}. Must be Native or LINK",
            field="pay_fees_in",
            value=value,
        )


def parse_bool(value: str | bool, *, field: str) -> bool:
    """Parse a 'true'/'false' style task option."""
    if isinstance(value, bool):
        return value

    normalised = str(value).strip().lower()
    if normalised in ("true", "1", "yes"):
        return True
    if normalised in ("false", "0", "no"):
        return False
    raise ValidationError(f"Invalid boolean value for {field}: {value}", field=field, value=value)


def to_checksum(value: str, *, field: str) -> ChecksumAddress:
    """Checksum ``value`` or raise a validation error naming ``field``."""
    try:
        return Web3.to_checksum_address(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(
            f"Invalid address for {field}: {value}",
            field=field,
            value=value,
            details={"error": str(exc)},
        ) from exc


def same_address(left: str, right: str) -> bool:
    return left.lower() == right.lower()


def to_uint(value: int | str, *, field: str, bits: int = 256) -> int:
    """Convert a decimal or 0x-prefixed value to an unsigned integer."""
    try:
        if isinstance(value, str) and value.startswith("0x"):
            result = int(value, 16)
        else:
            result = int(value)
    except (ValueError, TypeError):
        raise ValidationError(f"{field} must be a valid integer", field=field, value=value)

    if result < 0:
        raise ValidationError(f"{field} cannot be negative", field=field, value=value)

    if result > 2**bits - 1:
        raise ValidationError(f"{field} exceeds uint{bits} maximum", field=field, value=value)

    return result


def serialise_receipt(receipt: Any) -> Any:
    """Serialise web3 receipt objects into JSON-friendly structures."""
    if receipt is None:
        return None
    if isinstance(receipt, Mapping):
        return {key: serialise_receipt(value) for key, value in receipt.items()}
    if isinstance(receipt, Sequence) and not isinstance(
        receipt, str | bytes | bytearray | HexBytes
    ):
        return [serialise_receipt(item) for item in receipt]
    if isinstance(receipt, bytes | bytearray | HexBytes):
        return HexBytes(receipt).to_0x_hex()
    return receipt
