from __future__ import annotations


def schedule(cryptkey: bytes) -> bytearray:
    """Return the 256-entry box permuted by ``cryptkey`` (RC4-style KSA)."""
    if not cryptkey:
        raise ValueError("cryptkey must not be empty")
    n = len(cryptkey)
    rndkey = [cryptkey[t % n] for t in range(256)]
    box = bytearray(range(256))
    j = 0
    for i in range(256):
        j = (j + box[i] + rndkey[i]) % 256
        box[i], box[j] = box[j], box[i]
    return box


def transform(data: bytes, cryptkey: bytes) -> bytes:
    """XOR ``data`` against the keystream derived from ``cryptkey``.

    Self-inverse: applying it twice with the same cryptkey returns ``data``.
    Every call starts from a freshly scheduled box.
    """
    box = schedule(cryptkey)
    out = bytearray(data)
    a = j = 0
    for i in range(len(out)):
        a = (a + 1) % 256
        j = (j + box[a]) % 256
        box[a], box[j] = box[j], box[a]
        out[i] ^= box[(box[a] + box[j]) % 256]
    return bytes(out)
