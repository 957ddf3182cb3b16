"""
Content assist for edit inputs of type ``user``.

Suggestions come from a static in-memory cache of user ids; callers may
replace it with set_user_cache().
"""

from typing import Iterable, List

MAX_SUGGESTIONS = 5

_user_cache: List[str] = ['alice', 'bob', 'carol', 'dave', 'eve', 'mallory', 'trent']


def set_user_cache(users: Iterable[str]) -> None:
    global _user_cache
    _user_cache = list(users)


def suggest_users(prefix: str) -> List[str]:
    """Up to MAX_SUGGESTIONS cached users starting with prefix, case-insensitively."""
    wanted = prefix.strip().lower()
    return [u for u in _user_cache if u.lower().startswith(wanted)][:MAX_SUGGESTIONS]
