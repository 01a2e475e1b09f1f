from __future__ import annotations

import hashlib


def derive_seed(base_seed: int, *, vector_index: int, bonus: int, purpose: str = "predict") -> int:
    payload = f"{base_seed}|{vector_index}|{bonus}|{purpose}".encode("utf-8")
    digest = hashlib.blake2b(payload, digest_size=8).digest()
    return int.from_bytes(digest, "big")
