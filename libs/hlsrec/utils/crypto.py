from Crypto.Cipher import AES


AES_128 = "AES-128"


def num_to_iv(n: int) -> bytes:
    """The implicit IV of a segment: its media sequence number as a big-endian 128 bit integer"""
    return b"\x00" * 8 + n.to_bytes(8, "big")


def parse_iv(value: str) -> bytes:
    """
    Decode an explicit IV attribute (a hexadecimal string, usually prefixed with ``0x``)
    and left-pad it with zero bytes to the cipher's block size.
    """
    if value[:2] in ("0x", "0X"):
        value = value[2:]
    if len(value) % 2:
        value = f"0{value}"
    iv = bytes.fromhex(value)
    if len(iv) > AES.block_size:
        raise ValueError(f"IV is longer than {AES.block_size} bytes: {value}")

    return b"\x00" * (AES.block_size - len(iv)) + iv


def decrypt_aes128(data: bytes, key: bytes, iv: bytes) -> bytes:
    """AES-128-CBC decryption of a whole payload, without removing any padding"""
    return AES.new(key, AES.MODE_CBC, iv).decrypt(data)


__all__ = ["AES", "AES_128", "decrypt_aes128", "num_to_iv", "parse_iv"]
