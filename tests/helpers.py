"""Shared test doubles: a dict-backed sink and a table-driven decryptor."""

from pathlib import Path

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "env"

# Public key named by the fixture files and the ciphertexts sealed for it
FAKE_PUBLIC_KEY = "Ek1Krd8QRcG2B20p1iwM6IHgUVGHyCcudqjqoAgqMQA="
FAKE_CIPHERTEXTS = {
    "kpOFCd76bsEMvgk7iJ1a7oHbQdGITAMAtUppEIBgRmUjinhWoxaKJD9Xz1SqKEwSGAlnuWhXksv1": "localhost",
    "k4hknNltlTjry3LFPsM3dtHkQdfJhWRRCK+X21JE6xAjg0xI3bT3rSXfJ9rdesIXWxYFzw==": "3306",
    "XZA6xt1uXF1OdDrROuvC5+zVD/3OwXaj9dgPGdkF0QFUaNfCFTcCsmJl7V5e9I7w39egprAOXJg=": "username",
    "iRJUQ3XaVQnhsUfea2i1NgZWb593oWXhjksHDeC2yzZFPKTsU7UC+D/vxDksSkDFff12oAqzVXk=": "pa$$w0rd",
}


class MemorySink:
    """Dict-backed environment sink."""

    def __init__(self, values=None):
        self.values = dict(values or {})

    def read(self, name):
        return self.values.get(name)

    def write(self, name, value):
        self.values[name] = value
        return True

    def delete(self, name):
        self.values.pop(name, None)
        return True


class FakeDecrypt:
    """Decryptor answering from a fixed ciphertext table."""

    def __init__(self, table=None, public_key=FAKE_PUBLIC_KEY):
        self.table = {public_key: dict(FAKE_CIPHERTEXTS if table is None else table)}
        self.calls = []

    def __call__(self, public_key, ciphertexts):
        self.calls.append((public_key, set(ciphertexts)))
        known = self.table.get(public_key, {})
        missing = [c for c in ciphertexts if c not in known]
        if missing:
            raise RuntimeError("Decryption failed")
        return {c: known[c] for c in ciphertexts}
