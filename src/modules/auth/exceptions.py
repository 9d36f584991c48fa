"""Account and authentication exceptions."""


class AccountError(Exception):
    """Base exception for account operations."""

    pass


class AccountNotFoundError(AccountError):
    """Raised when no account matches the given identifier."""

    def __init__(self, identifier: str, message: str = "No such account") -> None:
        self.identifier = identifier
        super().__init__(message)


class AccountAlreadyExistsError(AccountError):
    """Raised when an account with the same email already exists."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("Account already exists")


class AuthenticationError(AccountError):
    """Raised when credentials or a bearer token are rejected."""

    pass


class InvalidEmailError(AccountError):
    """Raised when an email address is not well formed."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Invalid email address: {email}")
