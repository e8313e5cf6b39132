class DomainError(Exception):
    """Base for errors a controller can show to the user as-is."""


class ValidationError(DomainError):
    """Bad form/import input, or a rule like "holiday must be in the selected year"."""


class AuthenticationError(DomainError):
    pass


class AuthorizationError(DomainError):
    """Logged in, but the role or client binding does not allow the action."""


class NotFoundError(DomainError):
    """A client, legal document, holiday or template id that does not exist."""
