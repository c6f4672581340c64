"""Domain errors raised by the race lifecycle services."""


class GameError(Exception):
    """Base class for errors an operator should see."""

    status_code: int = 400

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class RaceNotFoundError(GameError):
    """The race id does not exist."""

    status_code = 404

    def __init__(self, race_id: int):
        super().__init__(f"Race {race_id} not found")
        self.race_id = race_id


class RaceNotLockedError(GameError):
    """An operation needs a race that has been locked."""


class MissingResultsError(GameError):
    """Required result sets are not final yet."""

    def __init__(self, message: str, missing: list[str]):
        super().__init__(message)
        self.missing = missing


class SettlementError(GameError):
    """Settlement inputs are incomplete."""


class ResultValidationError(GameError):
    """A result batch is malformed."""

    status_code = 422
