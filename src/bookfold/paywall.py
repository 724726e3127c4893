"""Client-side unlock check for gated instructions.

This only checks that the typed-in purchase details look plausible. There
is no payment provider behind it and it must not be treated as access
control.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bookfold.typing.models import UnlockCredentials

MIN_CONFIRMATION_ID_LENGTH = 10


def is_plausible_unlock(credentials: UnlockCredentials | None) -> bool:
    """Return whether purchase details have the expected shape.

    Args:
        credentials (UnlockCredentials | None): Typed-in purchase details.

    Returns:
        bool: True when the email contains `@` and the confirmation id is long enough.
    """
    if credentials is None:
        return False
    return "@" in credentials.email and len(credentials.confirmation_id.strip()) >= MIN_CONFIRMATION_ID_LENGTH
