"""
Random short code generation.

Codes carry no uniqueness guarantee of their own; a collision shows up as a
unique-constraint violation when the link is stored.
"""

import random
import string
from typing import Optional

from snaplink_app.config import settings
from snaplink_app.services.validation import CODE_MAX_LENGTH, CODE_MIN_LENGTH

CODE_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits

_rng = random.SystemRandom()


def generate_code(length: Optional[int] = None) -> str:
    """
    Generate a random alphanumeric code.

    Args:
        length: Number of characters, defaults to settings.code_length

    Returns:
        A code drawn uniformly from the 62-character alphabet

    Raises:
        ValueError: If length falls outside the accepted 6-8 range
    """
    if length is None:
        length = settings.code_length
    if not CODE_MIN_LENGTH <= length <= CODE_MAX_LENGTH:
        raise ValueError(
            f"Code length must be between {CODE_MIN_LENGTH} and {CODE_MAX_LENGTH}, got {length}"
        )
    return ''.join(_rng.choice(CODE_ALPHABET) for _ in range(length))
