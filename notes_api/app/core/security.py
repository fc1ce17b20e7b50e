"""
Credential helpers.

Passwords are stored and compared verbatim; the persisted ``@users``
format has no room for a salt or hash.  The comparison itself is done
in constant time so response timing does not reveal how much of a
password matched.
"""

import hmac


def passwords_match(stored_password: str, supplied_password: str) -> bool:
    """Compare a stored plaintext password with a supplied one.

    Both strings are encoded as UTF‑8 before comparison because
    ``hmac.compare_digest`` only accepts ASCII ``str`` values.
    """
    return hmac.compare_digest(
        stored_password.encode("utf-8"),
        supplied_password.encode("utf-8"),
    )
