import random
import string

ALPHABET = string.ascii_letters + string.digits


def generate_short_code(length: int = 6) -> str:
    """
    Generate a random code of specified length.

    Codes are drawn uniformly from mixed case letters and digits. Uniqueness
    is not guaranteed; callers check against existing keys and retry.

    The module-level ``random`` generator is predictable enough for short
    codes and visitor tokens but not for secrets. A hardened deployment would
    switch this to ``secrets.choice``.

    Args:
        length: Length of the code to generate, defaults to 6

    Returns:
        A random string with mixed case letters and digits
    """
    if length < 1:
        raise ValueError("length must be positive")
    return "".join(random.choice(ALPHABET) for _ in range(length))
