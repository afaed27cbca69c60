"""
Application exceptions.

Services raise these; ``app.main`` maps each category to an HTTP status.
"""

from typing import Optional


class RangeLogException(Exception):
    """Base exception for all RangeLog application exceptions."""
    pass


# ----------------------------------------------------------------------
# Categories
# ----------------------------------------------------------------------


class ValidationError(RangeLogException):
    """Raised when a request is rejected by a business rule."""
    pass


class AuthenticationError(RangeLogException):
    """Raised when no authenticated owner is available."""
    pass


class NotFoundError(RangeLogException):
    """Raised when a requested resource is not found."""
    pass


class ConflictError(RangeLogException):
    """Raised when a request conflicts with existing state."""
    pass


class StoreFailure(RangeLogException):
    """Raised when the persistence layer fails.

    Always chained from the underlying driver/ORM error.
    """
    pass


class StoreConstraintViolation(StoreFailure):
    """A write was rejected by a store-level constraint."""
    pass


# ----------------------------------------------------------------------
# Specific kinds
# ----------------------------------------------------------------------


class NotAuthenticated(AuthenticationError):
    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class NotFound(NotFoundError):
    """A session, target, training or drill does not exist (or is not yours)."""

    def __init__(self, resource: str, resource_id: object = None):
        self.resource = resource
        self.resource_id = resource_id
        suffix = f" '{resource_id}'" if resource_id is not None else ""
        super().__init__(f"{resource}{suffix} not found")


class MissingDrillConfiguration(ValidationError):
    def __init__(self):
        super().__init__("A drill configuration is required. "
                         "Use a custom drill, a training drill or a drill template.")


class DrillTrainingMismatch(ValidationError):
    def __init__(self, drill_id: int, training_id: int):
        self.drill_id = drill_id
        self.training_id = training_id
        super().__init__(f"Drill {drill_id} does not belong to training {training_id}.")


class DrillSelectionRequired(ValidationError):
    def __init__(self, training_id: int):
        self.training_id = training_id
        super().__init__(f"Training {training_id} uses drills. Start your session from a specific drill.")


class DrillLimitExceeded(ValidationError):
    """A new target would break the drill's target/shot contract."""
    pass


class InvalidSessionState(ConflictError):
    """The session is not in a state that allows the operation."""
    pass


class ActiveSessionConflict(ConflictError):
    """An active session for the same training already runs a different drill."""

    def __init__(self, message: str, session_id: Optional[int] = None, training_id: Optional[int] = None,
                 existing_drill_id: Optional[int] = None, requested_drill_id: Optional[int] = None, ):
        self.session_id = session_id
        self.training_id = training_id
        self.existing_drill_id = existing_drill_id
        self.requested_drill_id = requested_drill_id
        super().__init__(message)
