"""Registry error taxonomy.

Validation errors are client-correctable; state errors reflect the
identity/lifecycle preconditions. Both leave the registry untouched.
Each class carries a stable ``code`` used by the CLI and in logs.
"""

from __future__ import annotations


class ArtistRegistryError(RuntimeError):
    """Base class for every error raised by the registry core."""

    code: str = "ArtistRegistryError"


class ArtistValidationError(ArtistRegistryError):
    """Input rejected; the caller can correct it and retry."""


class ArtistStateError(ArtistRegistryError):
    """Identity or lifecycle precondition not met."""


# -- validation -------------------------------------------------------------


class NotUniqueGenreError(ArtistValidationError):
    """A genre appears multiple times in the artist data."""

    code = "NotUniqueGenre"


class NotUniqueAssetError(ArtistValidationError):
    """An asset fingerprint appears multiple times in the artist data."""

    code = "NotUniqueAsset"


class NameUnavailableError(ArtistValidationError):
    """The main name is already held by another artist."""

    code = "NameUnavailable"


class FullError(ArtistValidationError):
    """A bounded collection is already at capacity."""

    code = "Full"


class NotFoundError(ArtistValidationError):
    """The element to remove is not present."""

    code = "NotFound"


class CapacityExceededError(ArtistValidationError):
    """An input is longer or larger than its configured bound."""

    code = "CapacityExceeded"


class InvalidNameError(ArtistValidationError):
    """The main name is empty."""

    code = "InvalidName"


# -- state ------------------------------------------------------------------


class NotRegisteredError(ArtistStateError):
    """Account isn't registered as an artist."""

    code = "NotRegistered"


class AlreadyRegisteredError(ArtistStateError):
    """Account is already registered as an artist."""

    code = "AlreadyRegistered"


class IsVerifiedError(ArtistStateError):
    """Artist is verified and can't unregister."""

    code = "IsVerified"


class PeriodNotPassedError(ArtistStateError):
    """Unregister period isn't fully elapsed."""

    code = "PeriodNotPassed"
