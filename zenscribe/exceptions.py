"""Typed exceptions for ZenScribe."""


class ZenScribeError(Exception):
    """Base exception for ZenScribe errors."""
    pass


class PersistenceUnavailable(ZenScribeError):
    """The storage medium could not be read or written."""
    pass


class GenerationFailed(ZenScribeError):
    """The text-generation call did not produce an article."""
    pass


class PreconditionNotMet(ZenScribeError):
    """An action was attempted without a session user."""
    pass


class PublishFailed(ZenScribeError):
    """The article could not be sent to the destination."""
    pass
