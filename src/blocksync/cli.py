"""blocksync CLI entrypoint."""

from __future__ import annotations

import click

from blocksync import __version__


@click.group()
@click.version_option(version=__version__, prog_name="blocksync")
def main() -> None:
    """blocksync — AWS Bedrock model block maintenance."""


# Register subcommands
from blocksync.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
