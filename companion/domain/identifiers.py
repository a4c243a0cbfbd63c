"""Short opaque identifiers for locally created records.

Not cryptographically secure. Collisions are negligible for a single-user
dataset of a few hundred records.
"""
import random
import string

ALPHABET = string.digits + string.ascii_uppercase
DEFAULT_LENGTH = 8


def generate_id(length: int = DEFAULT_LENGTH) -> str:
    """Return `length` base-36 symbols, each chosen independently."""
    return "".join(random.choice(ALPHABET) for _ in range(length))
