"""
Jackpot Dice - Engine Errors

Every rejected operation raises one of these. Rejections are raised
before any record is replaced, so a failed operation has no effect.
"""


class DiceGameError(Exception):
    """Base class for all rejected game operations."""

    message = "Operation rejected."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


# -- Precondition violations: operation invoked out of turn ---------------

class PreconditionError(DiceGameError):
    """The session or ledger is not in a state that allows the operation."""


class AlreadyInGame(PreconditionError):
    message = "Already in game."


class NotPaid(PreconditionError):
    message = "Player has not paid."


class AlreadyRolled(PreconditionError):
    message = "Dice already rolled."


class NotRolled(PreconditionError):
    message = "Player not rolled."


class CooldownActive(PreconditionError):
    message = "Cooldown active."


class NotWinner(PreconditionError):
    message = "Not the winner."


class UnknownSession(PreconditionError):
    message = "No game session for player."


# -- Resource violations: balance too low --------------------------------

class ResourceError(DiceGameError):
    """A balance involved in the operation is insufficient."""


class InsufficientFunds(ResourceError):
    message = "Insufficient funds."


class NoJackpot(ResourceError):
    message = "No jackpot to withdraw."


# -- Input violations: malformed argument --------------------------------

class InputError(DiceGameError, ValueError):
    """An argument is malformed."""


class InvalidCategory(InputError):
    message = "Invalid scoring type."
