"""Default token hasher.

Tokens are opaque platform objects; their string form is hashed with SHA-256
so keys stay compact and identical across process restarts.
"""

from __future__ import annotations

import hashlib
from typing import Any


class Sha256TokenHasher:
    """Hash ``str(token)`` with SHA-256 and return the lowercase hex digest.

    Examples
    --------
    >>> len(Sha256TokenHasher().hash("token"))
    64
    >>> Sha256TokenHasher().hash("token") == Sha256TokenHasher().hash("token")
    True
    """

    def hash(self, token: Any) -> str:
        return hashlib.sha256(str(token).encode("utf-8")).hexdigest()
