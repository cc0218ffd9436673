"""Storage key derivation for published videos."""

import secrets

KEY_RANDOM_BYTES = 32


def build_storage_key(label):
    """
    Return ``<label>/<64 hex chars>.mp4``.

    Uniqueness comes from the 256 random bits alone; no existing-key lookup
    is made.
    """
    return f"{label}/{secrets.token_hex(KEY_RANDOM_BYTES)}.mp4"
