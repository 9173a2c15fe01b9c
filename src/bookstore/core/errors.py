"""Domain error taxonomy shared by services and routers."""


class BookstoreError(Exception):
    """Base class for application errors."""


class StoreFault(BookstoreError):
    """The persistence store failed (connectivity, constraint violation)."""


class AuthenticationError(BookstoreError):
    """Credentials did not match a stored identity.

    The message never says whether the identifier or the password was wrong.
    """

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)
