"""
Jackpot Dice - Input Validation Utilities

Provides validation functions for game engine inputs. All validators
either return validated data or raise descriptive exceptions.
"""

from typing import Sequence

from src.engine.base import ADDRESS_LENGTH, DIE_FACES, NUM_DICE
from src.engine.errors import InvalidCategory

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1
UINT64_MAX = 2 ** 64 - 1


def validate_dice_values(
    values: Sequence[int],
    count: int = NUM_DICE,
) -> tuple[int, ...]:
    """
    Validate and normalize dice values.

    Args:
        values: Sequence of dice values to validate
        count: Exact number of dice required

    Returns:
        Validated values as a tuple

    Raises:
        ValueError: If validation fails
    """
    values_tuple = tuple(values)

    if len(values_tuple) != count:
        raise ValueError(f"Exactly {count} dice required, got {len(values_tuple)}.")

    for i, value in enumerate(values_tuple):
        if not isinstance(value, int):
            raise ValueError(f"Die value at index {i} must be an integer, got {type(value).__name__}.")
        if not (1 <= value <= DIE_FACES):
            raise ValueError(
                f"Die value at index {i} is {value}, must be between 1 and {DIE_FACES}."
            )

    return values_tuple


def validate_address(address: bytes) -> bytes:
    """
    Validate a player or operator address.

    Args:
        address: Raw address bytes

    Returns:
        The address as immutable bytes

    Raises:
        ValueError: If the address is not 32 bytes
    """
    if not isinstance(address, (bytes, bytearray)):
        raise ValueError(f"Address must be bytes, got {type(address).__name__}.")

    if len(address) != ADDRESS_LENGTH:
        raise ValueError(f"Address must be {ADDRESS_LENGTH} bytes, got {len(address)}.")

    return bytes(address)


def validate_category(category: int) -> int:
    """
    Validate a scoring category.

    Raises:
        InvalidCategory: If category is not an integer in 1-6
    """
    if isinstance(category, bool) or not isinstance(category, int):
        raise InvalidCategory(f"Category must be an integer, got {type(category).__name__}.")

    if not (1 <= category <= DIE_FACES):
        raise InvalidCategory(f"Category must be between 1 and {DIE_FACES}, got {category}.")

    return category


def validate_timestamp(timestamp: int) -> int:
    """Validate a clock reading fits a signed 64-bit integer."""
    if isinstance(timestamp, bool) or not isinstance(timestamp, int):
        raise ValueError(f"Timestamp must be an integer, got {type(timestamp).__name__}.")

    if not (INT64_MIN <= timestamp <= INT64_MAX):
        raise ValueError(f"Timestamp {timestamp} does not fit in a signed 64-bit integer.")

    return timestamp


def validate_amount(amount: int, allow_zero: bool = True) -> int:
    """
    Validate a currency amount.

    Args:
        amount: Amount in base currency units
        allow_zero: Whether zero is an acceptable amount

    Returns:
        Validated amount

    Raises:
        ValueError: If amount is negative, zero when disallowed, or too large
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValueError(f"Amount must be an integer, got {type(amount).__name__}.")

    if amount < 0:
        raise ValueError(f"Amount cannot be negative, got {amount}.")

    if not allow_zero and amount == 0:
        raise ValueError("Amount must be positive.")

    if amount > UINT64_MAX:
        raise ValueError(f"Amount {amount} exceeds the unsigned 64-bit range.")

    return amount
