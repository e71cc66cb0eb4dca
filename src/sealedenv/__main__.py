import click

from sealedenv.cli.crypt import decrypt_value, encrypt_value
from sealedenv.cli.keypair import keypair
from sealedenv.cli.load import load
from sealedenv.version import get_package_info

PACKAGE_NAME, PACKAGE_VERSION = get_package_info()


@click.group(invoke_without_command=True)
@click.version_option(version=PACKAGE_VERSION, prog_name=PACKAGE_NAME)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """sealedenv CLI"""
    # Show help when no subcommand is provided
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(keypair)
cli.add_command(encrypt_value)
cli.add_command(decrypt_value)
cli.add_command(load)


if __name__ == "__main__":
    cli()
