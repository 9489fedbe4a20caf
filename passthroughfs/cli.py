"""Command line entry point: ``passthroughfs MOUNTPOINT --target DIR``."""

from __future__ import annotations

import logging
import sys

import click

from .config import MountConfig

logger = logging.getLogger(__name__)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("mountpoint", type=click.Path(file_okay=False))
@click.option(
    "--target",
    required=True,
    type=click.Path(exists=True, file_okay=False),
    help="Real directory to expose at the mount point.",
)
@click.option("--name", default="hello", show_default=True, help="Display name.")
@click.option(
    "--contents", default="Hello World!\n", show_default=True, help="Display contents."
)
@click.option(
    "--foreground/--background",
    default=True,
    show_default=True,
    help="Stay attached to the terminal until unmounted.",
)
@click.option(
    "--threads/--single-thread",
    default=True,
    show_default=True,
    help="Let the runtime serve requests concurrently.",
)
@click.option(
    "--readdir-plus", is_flag=True, help="Stat every entry while listing directories."
)
@click.option(
    "--no-follow-symlinks",
    "no_follow",
    is_flag=True,
    help="Show symlinks as links instead of as their targets.",
)
@click.option(
    "--strict-errors",
    is_flag=True,
    help="Report the OS error on failed file opens and reads instead of EIO.",
)
@click.option(
    "--no-kernel-cache", is_flag=True, help="Do not keep file data in the page cache."
)
@click.option("--debug", is_flag=True, help="Log every filesystem call.")
def main(
    mountpoint: str,
    target: str,
    name: str,
    contents: str,
    foreground: bool,
    threads: bool,
    readdir_plus: bool,
    no_follow: bool,
    strict_errors: bool,
    no_kernel_cache: bool,
    debug: bool,
):
    """Mount a read-only mirror of --target at MOUNTPOINT.

    \b
    Examples:

        passthroughfs /mnt/data --target ./nfs

        passthroughfs /mnt/data --target /srv/data --background
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    config = MountConfig.from_target(
        target,
        name=name,
        contents=contents,
        kernel_cache=not no_kernel_cache,
        readdir_plus=readdir_plus,
        follow_symlinks=not no_follow,
        strict_errors=strict_errors,
    )

    from .mount import mount

    try:
        mount(
            config,
            mountpoint,
            foreground=foreground,
            nothreads=not threads,
            debug=debug,
        )
    except (RuntimeError, OSError) as exc:
        logger.error("FUSE mount failed - is it already mounted? %s", exc)
        sys.exit(1)
