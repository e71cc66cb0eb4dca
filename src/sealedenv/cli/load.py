from pathlib import Path

import click

from sealedenv.cli.utils import configure_logging, output_error, output_result
from sealedenv.config import load_sealedenv_config
from sealedenv.dotenvx import Dotenvx


@click.command(name="load")
@click.argument("paths", nargs=-1, type=click.Path(file_okay=False))
@click.option("--name", "names", multiple=True, help="Dotenv file name to look for (repeatable)")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Path to a sealedenv config file")
@click.option("--hierarchical", is_flag=True, help="Split names into a nested tree")
@click.option("--separator", help="Separator for hierarchical names")
@click.option("--no-decrypt", is_flag=True, help="Print sealed values as they are")
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
def load(
    paths: tuple[str, ...],
    names: tuple[str, ...],
    config_path: str | None,
    hierarchical: bool,
    separator: str | None,
    no_decrypt: bool,
    json_output: bool,
    debug: bool,
) -> None:
    """Load dotenv files, decrypt sealed values and print the result.

    \b
    Sealed values are opened with the key pair from DOTENV_PUBLIC_KEY and
    DOTENV_PRIVATE_KEY. Command line options override the config file.

    \b
    Examples:
        sealedenv load
        sealedenv load config/ --name .env --name .env.local
        sealedenv load --hierarchical --separator __ --json-output
    """
    configure_logging(debug=debug)
    try:
        config = load_sealedenv_config(Path(config_path) if config_path else None)
        if paths:
            config.paths = list(paths)
        if names:
            config.names = list(names)
        if hierarchical:
            config.hierarchical = True
        if separator:
            config.separator = separator
        if no_decrypt:
            config.decrypt = False
        # Only print, never export into this process
        config.mirror_environment = False

        dotenv = Dotenvx.from_config(config)
        dotenv.load()
        store = dotenv.store
        if store is None:
            result: dict = {}
        elif json_output and config.hierarchical:
            result = store.to_dict()
        else:
            result = store.flatten()
        output_result(result, json_output)
    except Exception as e:
        output_error(e, json_output, debug)
