class DomainError(Exception):
    """Base class for errors raised by the domain services."""


class NotFoundError(DomainError):
    pass


class PermissionDeniedError(DomainError):
    pass


class ConflictError(DomainError):
    pass


class InvalidInputError(DomainError):
    pass


class LLMNotConfiguredError(RuntimeError):
    """No AI provider credentials were supplied."""


class LLMResponseError(ValueError):
    """The model replied, but not with the JSON we asked for."""
