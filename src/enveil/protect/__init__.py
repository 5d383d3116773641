"""File protection (quarantine and encryption) for Enveil."""

from .protector import (
    FileProtector,
    decode_key,
    decrypt_bytes,
    decrypt_file,
    encode_key,
    encrypt_bytes,
    generate_key,
    protect,
)

__all__ = [
    "FileProtector",
    "decode_key",
    "decrypt_bytes",
    "decrypt_file",
    "encode_key",
    "encrypt_bytes",
    "generate_key",
    "protect",
]
