import secrets
import string

from typing_extensions import LiteralString


## for user and post ids
def generate_digits_lowercase(length: int = 12) -> str:
    """
    Generate a secure random string with digits and lowercase letters.

    Args:
        length (int): Length of the string to generate. Default is 12.

    Returns:
        str: A secure random string.
    """
    chars: LiteralString = string.digits + string.ascii_lowercase
    return "".join(secrets.choice(seq=chars) for _ in range(length))
