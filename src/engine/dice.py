"""
Jackpot Dice - Dice Engine

Derives five dice from a player address and a clock reading, and packs
them into a 16-bit integer (3 bits per face).

The roll is a Keccak-256 hash of (address || big-endian timestamp). It is
fully deterministic: anyone who knows the address and can predict the
timestamp can predict the dice. Do not rely on it where unpredictability
matters; a verifiable randomness source would be needed for that.
"""

from typing import Sequence

from Crypto.Hash import keccak

from src.engine.base import DIE_FACES, NUM_DICE, DiceRoll
from src.engine.validators import validate_address, validate_timestamp


class DiceEngine:
    """
    Stateless dice roller and packer.

    All methods are class methods operating on immutable data.
    """

    BITS_PER_DIE = 3
    DIE_MASK = 0b111
    TIMESTAMP_BYTES = 8

    @classmethod
    def seed_bytes(cls, seed: bytes, timestamp: int) -> bytes:
        """Build the 40-byte hash input: 32 seed bytes then 8 timestamp bytes."""
        seed = validate_address(seed)
        timestamp = validate_timestamp(timestamp)
        return seed + timestamp.to_bytes(cls.TIMESTAMP_BYTES, "big", signed=True)

    @classmethod
    def roll(cls, seed: bytes, timestamp: int) -> DiceRoll:
        """
        Roll five dice for a player at a given time.

        Args:
            seed: 32-byte player address
            timestamp: Clock reading in seconds

        Returns:
            DiceRoll with five values in 1-6
        """
        digest = keccak.new(digest_bits=256, data=cls.seed_bytes(seed, timestamp)).digest()
        return DiceRoll(values=tuple((digest[i] % DIE_FACES) + 1 for i in range(NUM_DICE)))

    @classmethod
    def pack(cls, values: Sequence[int] | DiceRoll) -> int:
        """
        Pack five faces into an integer, face i at bits [3i, 3i+3).

        Raises:
            ValueError: If there are not five values or a value exceeds 3 bits
        """
        faces = values.values if isinstance(values, DiceRoll) else tuple(values)
        if len(faces) != NUM_DICE:
            raise ValueError(f"Exactly {NUM_DICE} dice required, got {len(faces)}.")

        packed = 0
        for i, face in enumerate(faces):
            if not (0 <= face <= cls.DIE_MASK):
                raise ValueError(f"Die value {face} does not fit in {cls.BITS_PER_DIE} bits.")
            packed |= face << (i * cls.BITS_PER_DIE)
        return packed

    @classmethod
    def unpack(cls, packed: int) -> tuple[int, ...]:
        """Extract five 3-bit faces. Values are 0-7; only 1-6 follow a roll."""
        return tuple(
            (packed >> (i * cls.BITS_PER_DIE)) & cls.DIE_MASK
            for i in range(NUM_DICE)
        )

    @classmethod
    def roll_packed(cls, seed: bytes, timestamp: int) -> int:
        """Roll and pack in one step."""
        return cls.pack(cls.roll(seed, timestamp))
