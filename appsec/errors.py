"""
Errors
======
Typed failures raised by the key stores and cipher engines.

Every failure has its own class so callers can branch on the type instead
of parsing messages. Where a failure is really a bad argument the class
also derives from the matching built-in (ValueError / TypeError), so code
written against plain Python exceptions keeps working.

AuthenticationFailed and DecryptionFailed carry one fixed message and never
chain the library exception underneath them.

Hierarchy:
    AppSecError
    ├── InvalidKeyLength        (ValueError)
    ├── KeyNotLoaded
    ├── UnsupportedKeyType      (TypeError)
    ├── InvalidKeyMaterial      (ValueError)
    ├── MalformedPEM            (ValueError)
    ├── InputTooShort           (ValueError)
    ├── MessageTooLong          (ValueError)
    ├── InvalidEncoding         (ValueError)
    ├── AuthenticationFailed
    ├── DecryptionFailed
    └── RandomnessUnavailable
"""

class AppSecError(Exception):
    """Base class for every appsec failure."""


class InvalidKeyLength(AppSecError, ValueError):
    """Symmetric key is not exactly 32 bytes."""

    EXPECTED = 32

    def __init__(self, length: int):
        self.length = length
        super().__init__(
            f"invalid AES key length. Expected {self.EXPECTED} bytes, got {length} bytes"
        )


class KeyNotLoaded(AppSecError):
    """The RSA key half needed for the operation has not been loaded."""

    def __init__(self, which: str):
        self.which = which
        super().__init__(f"RSA {which} key is not loaded")


class UnsupportedKeyType(AppSecError, TypeError):
    """PEM content holds a key that is not RSA."""

    def __init__(self, found: str):
        self.found = found
        super().__init__(f"not an RSA key: {found}")


class InvalidKeyMaterial(AppSecError, ValueError):
    pass


class MalformedPEM(AppSecError, ValueError):
    pass


class InputTooShort(AppSecError, ValueError):
    def __init__(self, length: int, minimum: int):
        self.length  = length
        self.minimum = minimum
        super().__init__(f"input too short: {length} bytes, need at least {minimum}")


class MessageTooLong(AppSecError, ValueError):
    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit  = limit
        super().__init__(f"message too long for RSA key: {length} bytes, limit {limit}")


class InvalidEncoding(AppSecError, ValueError):
    pass


class AuthenticationFailed(AppSecError):
    def __init__(self):
        super().__init__("message authentication failed")


class DecryptionFailed(AppSecError):
    def __init__(self):
        super().__init__("decryption failed")


class RandomnessUnavailable(AppSecError):
    pass
