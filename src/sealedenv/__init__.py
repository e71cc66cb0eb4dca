"""sealedenv - encrypted dotenv configuration for Python applications.

Values in a dotenv file can be sealed with the public key of a Curve25519 key
pair. Anyone holding the public key can add secrets; only the holder of the
private key can read them.

```text
DOTENV_PUBLIC_KEY="Ek1K..."
DB_HOST=localhost
DB_PASSWORD="encrypted:BBn4..."
```

## Core Modules

### Codec (`sealedenv.crypto`)
Key generation, sealing and opening of individual values.

### Variable store (`sealedenv.store`)
Flat or hierarchical (``APP.DB.HOST``) variable trees.

### Scanner (`sealedenv.scanner`)
Detection, collection and replacement of sealed values in a store.

### Pipeline (`sealedenv.pipeline`)
Decryption of parsed entries before they are committed.

### Loading (`sealedenv.loading`)
Sources, the dotenv parser and repositories writing to ``os.environ`` or a store.

## Quick Start

```python
from sealedenv import Dotenvx
from sealedenv.providers import EnvKeyProvider

dotenv = Dotenvx.create_immutable(".")
dotenv.load_with_key(EnvKeyProvider())
dotenv.required("DB_PASSWORD").not_empty()
```
"""

from .dotenvx import Dotenvx
from .exceptions import (
    CryptoUnavailable,
    DecryptionFailed,
    InvalidEncoding,
    InvalidFile,
    InvalidKey,
    InvalidPath,
    InvalidVariableName,
    MissingPublicKey,
    SealedEnvError,
    ValidationError,
)
from .models import KeyPair
from .store import VariableStore
from .validator import Validator
from .version import PACKAGE_VERSION as __version__

__all__ = [
    "CryptoUnavailable",
    "DecryptionFailed",
    "Dotenvx",
    "InvalidEncoding",
    "InvalidFile",
    "InvalidKey",
    "InvalidPath",
    "InvalidVariableName",
    "KeyPair",
    "MissingPublicKey",
    "SealedEnvError",
    "ValidationError",
    "Validator",
    "VariableStore",
    "__version__",
]
