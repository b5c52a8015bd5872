import pytest
from Crypto.Cipher import AES

from hlsrec.utils.crypto import decrypt_aes128, num_to_iv, parse_iv


@pytest.mark.parametrize(("num", "expected"), [
    (0, bytes(16)),
    (1, bytes(15) + b"\x01"),
    (10, bytes(15) + b"\x0a"),
    (0x0102030405060708, bytes(8) + bytes([1, 2, 3, 4, 5, 6, 7, 8])),
])
def test_num_to_iv(num, expected):
    iv = num_to_iv(num)
    assert len(iv) == 16
    assert iv == expected


@pytest.mark.parametrize(("value", "expected"), [
    ("0x000102030405060708090a0b0c0d0e0f", bytes(range(16))),
    ("0X000102030405060708090A0B0C0D0E0F", bytes(range(16))),
    ("000102030405060708090a0b0c0d0e0f", bytes(range(16))),
    ("0x1", bytes(15) + b"\x01"),
    ("0xabc", bytes(14) + b"\x0a\xbc"),
])
def test_parse_iv(value, expected):
    assert parse_iv(value) == expected


@pytest.mark.parametrize("value", ["0xzz", "0x" + "00" * 17])
def test_parse_iv_invalid(value):
    with pytest.raises(ValueError):  # noqa: PT011
        parse_iv(value)


def test_decrypt_implicit_iv():
    key = bytes(range(16))
    plaintext = b"0123456789abcdef" * 4
    iv = num_to_iv(42)
    ciphertext = AES.new(key, AES.MODE_CBC, iv).encrypt(plaintext)

    assert ciphertext != plaintext
    assert decrypt_aes128(ciphertext, key, num_to_iv(42)) == plaintext
    assert decrypt_aes128(ciphertext, key, num_to_iv(43)) != plaintext


def test_decrypt_keeps_padding():
    key = bytes(range(16))
    plaintext = b"payload" + b"\x09" * 9
    ciphertext = AES.new(key, AES.MODE_CBC, num_to_iv(0)).encrypt(plaintext)

    assert decrypt_aes128(ciphertext, key, num_to_iv(0)) == plaintext


def test_decrypt_partial_block():
    with pytest.raises(ValueError):  # noqa: PT011
        decrypt_aes128(b"\x00" * 15, bytes(16), num_to_iv(0))
