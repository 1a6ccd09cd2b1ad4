"""Exception taxonomy for loan origination operations."""


class LoanOriginationError(Exception):
    """Base class for all domain errors raised by the service layer."""


class NotFoundError(LoanOriginationError):
    """An identifier does not resolve to a stored entity."""


class NotAuthorizedError(LoanOriginationError):
    """The acting agent does not own the loan it is acting on."""


class InvalidStateError(LoanOriginationError):
    """A transition was attempted from a status that does not allow it."""


class AgentUnavailableError(LoanOriginationError):
    """No eligible agent could be found for an assignment."""


class TransientFailureError(LoanOriginationError):
    """A store or notification collaborator failed while a pass was running."""


class ConflictError(LoanOriginationError):
    """A unique attribute is already taken by another entity."""
