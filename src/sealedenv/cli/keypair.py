import click

from sealedenv.cli.utils import configure_logging, output_error, output_result
from sealedenv.crypto import generate_key_pair


@click.command(name="keypair")
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
def keypair(json_output: bool, debug: bool) -> None:
    """Generate a new key pair for sealing values.

    \b
    Put the public key in the dotenv file as DOTENV_PUBLIC_KEY and keep the
    private key out of the repository, e.g. in DOTENV_PRIVATE_KEY.

    \b
    Examples:
        sealedenv keypair
        sealedenv keypair --json-output
    """
    configure_logging(debug=debug)
    try:
        pair = generate_key_pair()
        output_result(
            {
                "DOTENV_PUBLIC_KEY": pair.public_key,
                "DOTENV_PRIVATE_KEY": pair.private_key.get_secret_value(),
            },
            json_output,
        )
    except Exception as e:
        output_error(e, json_output, debug)
