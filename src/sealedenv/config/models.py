"""Pydantic models for sealedenv configuration.

These models describe the ``sealedenv`` section of the configuration file:

```yaml
sealedenv:
  paths: ["."]
  names: [".env"]
  short_circuit: true
  hierarchical: false
  separator: "."
  mirror_environment: true
  keys:
    public_key_env: DOTENV_PUBLIC_KEY
    private_key_env: DOTENV_PRIVATE_KEY
```
"""

from pydantic import ConfigDict, Field

from ..models import SealedEnvBaseModel
from ..providers import DEFAULT_PRIVATE_KEY_ENV, DEFAULT_PUBLIC_KEY_ENV


class KeysConfigModel(SealedEnvBaseModel):
    """Where the built-in decryptor finds its key pair.

    Attributes:
        public_key_env: Environment variable holding the base64 public key
        private_key_env: Environment variable holding the base64 private key
    """

    # Allow mutability for config merging
    model_config = ConfigDict(extra="forbid", frozen=False)

    public_key_env: str = DEFAULT_PUBLIC_KEY_ENV
    private_key_env: str = DEFAULT_PRIVATE_KEY_ENV


class SealedEnvConfigModel(SealedEnvBaseModel):
    """Loading behaviour for `Dotenvx.from_config`.

    Attributes:
        paths: Directories searched for dotenv files
        names: File names tried in each directory (default ``.env``)
        short_circuit: Stop at the first readable file
        encoding: File encoding (default UTF-8)
        hierarchical: Store variables as a tree split on `separator`
        separator: Path separator for hierarchical stores
        immutable: Never overwrite variables that are already defined
        mirror_environment: Also write variables into ``os.environ``
        decrypt: Decrypt sealed values with the key pair from `keys`
        ignore_decryption_errors: Log decryption failures instead of raising
        keys: Key pair lookup settings

    Example:
        >>> config = SealedEnvConfigModel(paths=["config"], hierarchical=True)
    """

    # Allow mutability for config merging
    model_config = ConfigDict(extra="forbid", frozen=False)

    paths: list[str] = Field(default_factory=lambda: ["."])
    names: list[str] | None = None
    short_circuit: bool = True
    encoding: str | None = None
    hierarchical: bool = False
    separator: str = Field(default=".", min_length=1)
    immutable: bool = False
    mirror_environment: bool = True
    decrypt: bool = True
    ignore_decryption_errors: bool = False
    keys: KeysConfigModel = Field(default_factory=KeysConfigModel)
