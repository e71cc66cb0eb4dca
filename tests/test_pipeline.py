"""
Tests for sealedenv.pipeline.

Covers decryption of parsed entry sequences, the decryptor middleware and
the key pair decryptor.
"""

import logging

import pytest

from sealedenv.crypto import encrypt
from sealedenv.exceptions import DecryptionFailed, MissingPublicKey
from sealedenv.pipeline import (
    DecryptorMiddleware,
    Entry,
    decrypt_entries,
    key_pair_decryptor,
    replace_encrypted_entries,
)
from sealedenv.providers import StaticKeyProvider
from tests.helpers import FAKE_PUBLIC_KEY, FakeDecrypt

HOST_CIPHERTEXT = "kpOFCd76bsEMvgk7iJ1a7oHbQdGITAMAtUppEIBgRmUjinhWoxaKJD9Xz1SqKEwSGAlnuWhXksv1"
PORT_CIPHERTEXT = "k4hknNltlTjry3LFPsM3dtHkQdfJhWRRCK+X21JE6xAjg0xI3bT3rSXfJ9rdesIXWxYFzw=="


def sealed_entries():
    return [
        Entry("DOTENV_PUBLIC_KEY", FAKE_PUBLIC_KEY),
        Entry("DB_HOST", f"encrypted:{HOST_CIPHERTEXT}"),
        Entry("DB_PORT", f"encrypted:{PORT_CIPHERTEXT}"),
        Entry("APP_ENV", "production"),
    ]


class TestEntry:
    def test_repr_hides_value(self):
        assert "hunter2" not in repr(Entry("PASSWORD", "hunter2"))
        assert "unset" in repr(Entry("PASSWORD", None))


class TestDecryptEntries:
    """Test the all-or-nothing decryption of entry sequences."""

    def test_replaces_every_ciphertext(self, fake_decrypt):
        result = decrypt_entries(sealed_entries(), fake_decrypt)
        assert result == [
            Entry("DOTENV_PUBLIC_KEY", FAKE_PUBLIC_KEY),
            Entry("DB_HOST", "localhost"),
            Entry("DB_PORT", "3306"),
            Entry("APP_ENV", "production"),
        ]
        assert fake_decrypt.calls == [(FAKE_PUBLIC_KEY, {HOST_CIPHERTEXT, PORT_CIPHERTEXT})]

    def test_plain_entries_skip_decryptor(self, fake_decrypt):
        entries = [Entry("APP_ENV", "production"), Entry("UNSET", None)]
        assert decrypt_entries(entries, fake_decrypt) == entries
        assert fake_decrypt.calls == []

    def test_missing_public_key(self, fake_decrypt):
        with pytest.raises(MissingPublicKey):
            decrypt_entries([Entry("DB_HOST", f"encrypted:{HOST_CIPHERTEXT}")], fake_decrypt)

    def test_decryptor_error_propagates(self):
        decryptor = FakeDecrypt(table={HOST_CIPHERTEXT: "localhost"})
        with pytest.raises(RuntimeError, match="Decryption failed"):
            decrypt_entries(sealed_entries(), decryptor)

    def test_incomplete_result(self):
        def partial(public_key, ciphertexts):
            return {HOST_CIPHERTEXT: "localhost"}

        with pytest.raises(DecryptionFailed, match="DB_PORT"):
            decrypt_entries(sealed_entries(), partial)

    def test_shadowed_ciphertext_is_decrypted(self, fake_decrypt):
        """A ciphertext overridden by a later plain entry still gets resolved."""
        entries = sealed_entries() + [Entry("DB_HOST", "override")]
        result = decrypt_entries(entries, fake_decrypt)
        assert result[1] == Entry("DB_HOST", "localhost")
        assert result[-1] == Entry("DB_HOST", "override")
        assert HOST_CIPHERTEXT in fake_decrypt.calls[0][1]


class TestReplaceEncryptedEntries:
    def test_partial(self):
        result, still_encrypted = replace_encrypted_entries(
            sealed_entries(), {HOST_CIPHERTEXT: "localhost"}
        )
        assert still_encrypted is True
        assert result[1].value == "localhost"
        assert result[2].value == f"encrypted:{PORT_CIPHERTEXT}"

    def test_sentinel_untouched(self):
        entries = [Entry("DOTENV_PUBLIC_KEY", "encrypted:ONE")]
        result, still_encrypted = replace_encrypted_entries(entries, {"ONE": "x"})
        assert result == entries
        assert still_encrypted is False


class TestDecryptorMiddleware:
    def test_process(self, fake_decrypt):
        middleware = DecryptorMiddleware(fake_decrypt)
        assert middleware.process(sealed_entries())[1].value == "localhost"

    def test_errors_propagate_by_default(self):
        middleware = DecryptorMiddleware(FakeDecrypt(table={}))
        with pytest.raises(RuntimeError):
            middleware.process(sealed_entries())

    def test_ignore_errors(self, caplog):
        middleware = DecryptorMiddleware(FakeDecrypt(table={}), ignore_errors=True)
        entries = sealed_entries()
        with caplog.at_level(logging.WARNING):
            assert middleware.process(entries) == entries
        assert "Decryption failed" in caplog.text


class TestKeyPairDecryptor:
    """Test the built-in decryptor with a real key pair."""

    def test_decrypts_with_provider(self, key_pair):
        provider = StaticKeyProvider(key_pair.public_key, key_pair.private_key)
        entries = [
            Entry("DOTENV_PUBLIC_KEY", key_pair.public_key),
            Entry("SECRET", encrypt("hunter2", key_pair.public_key)),
        ]
        result = decrypt_entries(entries, key_pair_decryptor(provider))
        assert result[1] == Entry("SECRET", "hunter2")

    def test_accepts_key_pair(self, key_pair):
        sealed = encrypt("hunter2", key_pair.public_key)
        decryptor = key_pair_decryptor(key_pair)
        assert decryptor(key_pair.public_key, {sealed[len("encrypted:") :]}) == {
            sealed[len("encrypted:") :]: "hunter2"
        }

    def test_mismatched_sentinel_warns(self, key_pair, caplog):
        sealed = encrypt("hunter2", key_pair.public_key)
        with caplog.at_level(logging.WARNING):
            result = key_pair_decryptor(key_pair)("OTHER", {sealed[len("encrypted:") :]})
        assert list(result.values()) == ["hunter2"]
        assert "does not match" in caplog.text
