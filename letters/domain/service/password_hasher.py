"""Recommender credential hashing."""

import asyncio

import bcrypt

from .base import Service

# bcrypt only looks at the first 72 bytes
BCRYPT_MAX_BYTES = 72


class PasswordHasher(Service):
    """bcrypt password hashing.

    Hashing runs in a worker thread so a high work factor does not stall the
    event loop.
    """

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    async def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = await asyncio.to_thread(bcrypt.hashpw, _encode(password), salt)
        return hashed.decode("utf-8")

    async def verify(self, password: str, password_hash: str) -> bool:
        try:
            return await asyncio.to_thread(
                bcrypt.checkpw, _encode(password), password_hash.encode("utf-8")
            )
        except ValueError:
            return False


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]
