"""
gbs2gb - GBS to GB ROM Converter Command-Line Interface
=======================================================

This module implements the command-line interface for converting GBS music
rips into playable Game Boy ROMs.

Each input file is converted independently: a file that fails is reported
and the remaining files are still converted. The output file name is the
input name with its extension replaced by .gb.

Usage Examples
--------------
Convert a single file into the current directory:
    $ gbs2gb "Pokemon Red.gbs"

Convert several files into a directory:
    $ gbs2gb -o roms/ *.gbs

Use a player ROM from a custom location:
    $ gbs2gb -p ~/GBSPlay103_Mod.gb song.gbs
    $ GBS2GB_PLAYER=~/GBSPlay103_Mod.gb gbs2gb song.gbs
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from gbs2gb import __version__
from gbs2gb.cli.errors import ExitCode, describe_error, handle_cli_exception
from gbs2gb.errors import GBS2GBError
from gbs2gb.rom import (
    DEFAULT_PLAYER_NAME,
    PLAYER_ENV_VAR,
    ROMAssembler,
    load_player,
    output_path_for,
    player_from_bytes,
)

# Logger for this module
logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# Main Command
# =============================================================================

@click.command()
@click.argument(
    "input_files",
    nargs=-1,
    type=click.Path(path_type=Path),
    required=True,
)
@click.option(
    "-o", "--outdir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("./"),
    show_default=True,
    help="Output directory (created if missing)",
)
@click.option(
    "-p", "--player",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar=PLAYER_ENV_VAR,
    default=None,
    help=f"GBS player ROM (default: rom/roms/{DEFAULT_PLAYER_NAME}, or ${PLAYER_ENV_VAR})",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(__version__, "--version", "-V", prog_name="gbs2gb")
def main(
    input_files: tuple[Path, ...],
    outdir: Path,
    player: Optional[Path],
    verbose: bool,
) -> None:
    """
    Convert GBS music rips into playable Game Boy ROMs.

    INPUT_FILES are one or more .gbs files. Each one becomes a .gb ROM in
    the output directory.

    \b
    Examples:
      gbs2gb "Pokemon Red.gbs"
      gbs2gb -o roms/ *.gbs
      gbs2gb -p GBSPlay103_Mod.gb song.gbs
    """
    setup_logging(verbose)

    try:
        assembler = ROMAssembler(player_source=player_from_bytes(load_player(player)))
    except Exception as e:
        handle_cli_exception(e, verbose)

    failed = 0
    for input_path in input_files:
        logger.info(f"{input_path.name}:")
        try:
            output_path = assembler.convert_file(
                input_path,
                output_path=output_path_for(input_path, outdir),
            )
        except (GBS2GBError, OSError) as e:
            failed += 1
            click.echo(f"Failed {input_path}: {describe_error(e)}", err=True)
            continue

        click.echo(f"Created {output_path}")

    if verbose:
        converted = len(input_files) - failed
        click.echo(f"{converted}/{len(input_files)} files converted")

    if failed:
        sys.exit(ExitCode.BUILD_ERROR)


if __name__ == "__main__":
    main()
