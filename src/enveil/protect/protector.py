# SPDX-License-Identifier: MIT
"""
File protection - moves or encrypts sensitive files into a quarantine directory.

Encrypted artifacts are written as ``<name>.enc`` and contain exactly
``nonce (12 bytes) || AES-256-GCM ciphertext with appended 16-byte tag``.
"""
from __future__ import annotations

import base64
import binascii
import logging
import os
import shutil
import threading
from pathlib import Path
from typing import Iterable, List, Optional, Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from enveil.classify.rules import is_sensitive
from enveil.core.exceptions import (
    EncryptionFailure,
    QuarantineUnavailable,
    ReadFailure,
    SourceNotFound,
    WriteFailure,
)
from enveil.core.findings import ProtectAction, ProtectOption, ProtectResult
from enveil.core.walker import DEFAULT_QUARANTINE_DIR, iter_files, protect_skip_dirs

logger = logging.getLogger(__name__)

KEY_SIZE = 32
NONCE_SIZE = 12
TAG_SIZE = 16
ENCRYPTED_SUFFIX = ".enc"


def generate_key() -> bytes:
    """Generate a random 256-bit key."""
    return AESGCM.generate_key(bit_length=KEY_SIZE * 8)


def encode_key(key: bytes) -> str:
    return base64.b64encode(key).decode("ascii")


def decode_key(text: str) -> bytes:
    """
    Decode a base64 key and check its length.

    Raises:
        EncryptionFailure: If the text is not base64 or not 32 bytes long
    """
    try:
        key = base64.b64decode(text.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise EncryptionFailure(f"Invalid key encoding: {e}") from e
    _check_key(key)
    return key


def _check_key(key: bytes) -> None:
    if not isinstance(key, (bytes, bytearray)) or len(key) != KEY_SIZE:
        raise EncryptionFailure(f"Encryption key must be {KEY_SIZE} bytes")


def encrypt_bytes(plaintext: bytes, key: bytes) -> bytes:
    """Encrypt *plaintext* under a fresh random nonce; returns ``nonce || ciphertext``."""
    _check_key(key)
    nonce = os.urandom(NONCE_SIZE)
    try:
        ciphertext = AESGCM(bytes(key)).encrypt(nonce, plaintext, None)
    except (ValueError, OverflowError) as e:
        raise EncryptionFailure(f"Encryption failed: {e}") from e
    return nonce + ciphertext


def decrypt_bytes(blob: bytes, key: bytes) -> bytes:
    """
    Decrypt an artifact produced by :func:`encrypt_bytes`.

    Raises:
        EncryptionFailure: On a wrong key, tampered or truncated data
    """
    _check_key(key)
    if len(blob) < NONCE_SIZE + TAG_SIZE:
        raise EncryptionFailure("Encrypted data is truncated")
    nonce, ciphertext = blob[:NONCE_SIZE], blob[NONCE_SIZE:]
    try:
        return AESGCM(bytes(key)).decrypt(nonce, ciphertext, None)
    except InvalidTag as e:
        raise EncryptionFailure("Authentication failed: wrong key or tampered data") from e


def decrypt_file(path: Union[str, Path], key: bytes) -> bytes:
    """Read and decrypt a quarantined ``.enc`` artifact."""
    try:
        blob = Path(path).read_bytes()
    except OSError as e:
        raise EncryptionFailure(f"Failed to read encrypted file: {e}", path=str(path)) from e
    return decrypt_bytes(blob, key)


def _numbered(path: Path, counter: int) -> Path:
    # name.ext -> name_<n>.ext; extension-less names get a plain suffix
    if path.suffix:
        return path.with_name(f"{path.stem}_{counter}{path.suffix}")
    return path.with_name(f"{path.name}_{counter}")


def unique_path(path: Path) -> Path:
    """First of ``path``, ``name_1.ext``, ``name_2.ext``, ... that does not exist."""
    if not path.exists():
        return path
    counter = 1
    while True:
        candidate = _numbered(path, counter)
        if not candidate.exists():
            return candidate
        counter += 1


class FileProtector:
    """Moves or encrypts sensitive files into a quarantine directory."""

    def __init__(
        self,
        quarantine_dir: Union[str, Path] = DEFAULT_QUARANTINE_DIR,
        dry_run: bool = False,
        exclude_dirs: Iterable[str] = (),
    ):
        self.quarantine_dir = Path(quarantine_dir)
        self.dry_run = dry_run
        self.exclude_dirs = tuple(exclude_dirs)
        self._lock = threading.Lock()
        self._quarantine_ready = False

    def protect_file(
        self,
        path: Union[str, Path],
        action: Union[ProtectOption, str] = ProtectOption.MOVE,
        key: Optional[bytes] = None,
    ) -> ProtectResult:
        """
        Protect a single file.

        Args:
            path: File to protect
            action: Move, Encrypt or Both
            key: 32-byte key; generated per file when omitted and returned
                in ``ProtectResult.generated_key``

        Returns:
            The outcome; failures are reported, never raised
        """
        source = Path(path)
        option = action if isinstance(action, ProtectOption) else ProtectOption.parse(action)

        if not source.is_file():
            error = SourceNotFound("Source file does not exist", path=str(source))
            return self._failed(str(source), ProtectAction.SECURED, error)

        if self.dry_run:
            return self._dry_run_result(source, option)

        try:
            self._ensure_quarantine()
        except QuarantineUnavailable as e:
            return self._failed(str(source), ProtectAction.SECURED, e)

        if option is ProtectOption.MOVE:
            result = self._move_to_quarantine(source)
        else:
            result = self._encrypt_to_quarantine(source, key, option)

        if result.success:
            logger.info("%s %s -> %s", result.action.value, source, result.protected_path)
        else:
            logger.warning("Failed to protect %s: %s", source, result.message)
        return result

    def protect_directory(
        self,
        root: Union[str, Path],
        action: Union[ProtectOption, str] = ProtectOption.MOVE,
        key: Optional[bytes] = None,
    ) -> List[ProtectResult]:
        """
        Protect every sensitive file under *root*.

        The quarantine directory is never descended into. One result is
        returned per processed file; a failing file does not stop the run.
        """
        root_path = Path(root)
        if not root_path.is_dir():
            return [
                ProtectResult.failure(
                    str(root_path), ProtectAction.SECURED, "Invalid directory path"
                )
            ]

        quarantine = self.quarantine_dir.resolve()
        skip_dirs = protect_skip_dirs(self.quarantine_dir, self.exclude_dirs)
        # collect first: files are removed from the tree while protecting
        candidates = [
            p
            for p in iter_files(root_path, skip_dirs)
            if is_sensitive(p) and quarantine not in p.resolve().parents
        ]
        return [self.protect_file(p, action, key) for p in candidates]

    # -- internals --------------------------------------------------
    def _ensure_quarantine(self) -> None:
        if self._quarantine_ready:
            return
        with self._lock:
            if self._quarantine_ready:
                return
            try:
                self.quarantine_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise QuarantineUnavailable(
                    f"Failed to create secure directory: {e}", path=str(self.quarantine_dir)
                ) from e
            self._quarantine_ready = True

    def _claim_destination(self, name: str) -> Path:
        """Atomically create an empty, owner-only file under a free name."""
        wanted = self.quarantine_dir / name
        with self._lock:
            candidate, counter = wanted, 0
            while True:
                try:
                    fd = os.open(candidate, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o600)
                except FileExistsError:
                    counter += 1
                    candidate = _numbered(wanted, counter)
                    continue
                except OSError as e:
                    raise WriteFailure(f"Failed to create destination: {e}", path=str(candidate)) from e
                os.close(fd)
                return candidate

    def _dry_run_result(self, source: Path, option: ProtectOption) -> ProtectResult:
        if option is ProtectOption.MOVE:
            name, action, verb = source.name, ProtectAction.MOVED, "move"
        else:
            name, action, verb = source.name + ENCRYPTED_SUFFIX, ProtectAction.ENCRYPTED, "encrypt"
        dest = unique_path(self.quarantine_dir / name)
        return ProtectResult(
            original_path=str(source),
            protected_path=str(dest),
            action=action,
            success=True,
            message=f"Dry run: would {verb} to {dest}",
        )

    def _move_to_quarantine(self, source: Path) -> ProtectResult:
        try:
            dest = self._claim_destination(source.name)
        except WriteFailure as e:
            return self._failed(str(source), ProtectAction.MOVED, e)

        try:
            shutil.copyfile(source, dest)
        except OSError as e:
            dest.unlink(missing_ok=True)
            return ProtectResult.failure(
                str(source), ProtectAction.MOVED, f"Failed to move file: {e}"
            )

        try:
            source.unlink()
            message = "File moved to secure directory"
        except OSError as e:
            logger.warning("Could not remove original %s: %s", source, e)
            message = "File copied to secure directory (original removal failed)"

        return ProtectResult(
            original_path=str(source),
            protected_path=str(dest),
            action=ProtectAction.MOVED,
            success=True,
            message=message,
        )

    def _encrypt_to_quarantine(
        self, source: Path, key: Optional[bytes], option: ProtectOption
    ) -> ProtectResult:
        generated = None
        if key is None:
            key = generate_key()
            generated = encode_key(key)

        try:
            plaintext = source.read_bytes()
        except OSError as e:
            error = ReadFailure(f"Failed to read file: {e}", path=str(source))
            return self._failed(str(source), ProtectAction.ENCRYPTED, error)

        try:
            blob = encrypt_bytes(plaintext, key)
        except EncryptionFailure as e:
            return self._failed(str(source), ProtectAction.ENCRYPTED, e)

        try:
            dest = self._claim_destination(source.name + ENCRYPTED_SUFFIX)
            try:
                dest.write_bytes(blob)
            except OSError as e:
                dest.unlink(missing_ok=True)
                raise WriteFailure(f"Failed to write encrypted file: {e}", path=str(dest)) from e
        except WriteFailure as e:
            return self._failed(str(source), ProtectAction.ENCRYPTED, e)

        success = True
        message = "File encrypted and moved to secure directory"
        try:
            source.unlink()
        except OSError as e:
            logger.warning("Could not remove original %s: %s", source, e)
            if option is ProtectOption.BOTH:
                success = False
                message = f"File encrypted but plaintext original could not be removed: {e}"
            else:
                message = "File encrypted to secure directory (original removal failed)"

        return ProtectResult(
            original_path=str(source),
            protected_path=str(dest),
            action=ProtectAction.ENCRYPTED,
            success=success,
            message=message,
            generated_key=generated,
        )

    @staticmethod
    def _failed(original_path: str, action: ProtectAction, error: Exception) -> ProtectResult:
        return ProtectResult.failure(original_path, action, str(error))


def protect(
    target: Union[str, Path],
    action: Union[ProtectOption, str] = ProtectOption.MOVE,
    quarantine_dir: Union[str, Path] = DEFAULT_QUARANTINE_DIR,
    key: Optional[bytes] = None,
    dry_run: bool = False,
    exclude_dirs: Iterable[str] = (),
) -> Union[ProtectResult, List[ProtectResult]]:
    """
    Protect entry point: a file gives one result, a directory a list.
    """
    protector = FileProtector(quarantine_dir, dry_run=dry_run, exclude_dirs=exclude_dirs)
    if Path(target).is_dir():
        return protector.protect_directory(target, action, key)
    return protector.protect_file(target, action, key)
