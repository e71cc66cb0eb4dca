import click

from sealedenv.cli.utils import configure_logging, output_error, output_result
from sealedenv.crypto import decrypt, encrypt
from sealedenv.exceptions import InvalidKey
from sealedenv.providers import DEFAULT_PUBLIC_KEY_ENV, EnvKeyProvider


@click.command(name="encrypt")
@click.argument("value")
@click.option(
    "--public-key",
    "-k",
    envvar=DEFAULT_PUBLIC_KEY_ENV,
    help=f"Base64 public key (defaults to ${DEFAULT_PUBLIC_KEY_ENV})",
)
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
def encrypt_value(value: str, public_key: str | None, json_output: bool, debug: bool) -> None:
    """Seal VALUE for a public key and print the marked ciphertext.

    \b
    Examples:
        sealedenv encrypt s3cr3t -k Ek1K...
        DOTENV_PUBLIC_KEY=Ek1K... sealedenv encrypt s3cr3t
    """
    configure_logging(debug=debug)
    try:
        if not public_key:
            raise InvalidKey(f"No public key given; use --public-key or set {DEFAULT_PUBLIC_KEY_ENV}")
        output_result(encrypt(value, public_key), json_output)
    except Exception as e:
        output_error(e, json_output, debug)


@click.command(name="decrypt")
@click.argument("value")
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
def decrypt_value(value: str, json_output: bool, debug: bool) -> None:
    """Open a sealed VALUE with the key pair from the environment.

    The key pair is read from DOTENV_PUBLIC_KEY and DOTENV_PRIVATE_KEY.

    \b
    Examples:
        sealedenv decrypt "encrypted:BBn4..."
    """
    configure_logging(debug=debug)
    try:
        output_result(decrypt(value, EnvKeyProvider().get_key_pair()), json_output)
    except Exception as e:
        output_error(e, json_output, debug)
