"""bcrypt helpers for one-time login tokens.

bcrypt is CPU-bound (~50-100ms at cost 10), so both helpers run it in a
worker thread to keep the event loop responsive.
"""

import asyncio

import bcrypt

from passwordless_tinydb.core.errors import HashingError

# bcrypt input limit; hash_token refuses longer tokens
MAX_TOKEN_BYTES = 72


def _hash_sync(token: str, rounds: int) -> str:
    return bcrypt.hashpw(token.encode(), bcrypt.gensalt(rounds=rounds)).decode()


def _verify_sync(token: str, hashed_token: str) -> bool:
    return bcrypt.checkpw(token.encode(), hashed_token.encode())


async def hash_token(token: str, rounds: int) -> str:
    """Hash a plaintext token with a fresh random salt.

    Args:
        token: Plaintext token.
        rounds: bcrypt cost factor.

    Returns:
        bcrypt hash string (salt embedded).

    Raises:
        HashingError: If bcrypt rejects the input.
    """
    try:
        return await asyncio.to_thread(_hash_sync, token, rounds)
    except ValueError as exc:
        raise HashingError(f"token creation fail: {exc}") from exc


async def verify_token(token: str, hashed_token: str) -> bool:
    """Compare a plaintext token against a stored bcrypt hash.

    Args:
        token: Plaintext token supplied by the caller.
        hashed_token: Hash previously produced by hash_token().

    Returns:
        True if the token matches the hash. Tokens over MAX_TOKEN_BYTES
        never match, since hash_token cannot have produced the hash.

    Raises:
        HashingError: If the stored hash is malformed or the token is
            rejected by bcrypt.
    """
    if len(token.encode()) > MAX_TOKEN_BYTES:
        return False
    try:
        return await asyncio.to_thread(_verify_sync, token, hashed_token)
    except ValueError as exc:
        raise HashingError(f"token comparison fail: {exc}") from exc
