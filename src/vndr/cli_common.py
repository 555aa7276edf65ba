from __future__ import annotations

import argparse
import logging
import textwrap
from dataclasses import dataclass, field
from pathlib import Path

from vndr.adapters.git import GitCli
from vndr.adapters.http import RequestsFetcher
from vndr.adapters.npm import NpmCli
from vndr.core import HttpFetcher, PackageInstaller, VcsClient, VendorConfig
from vndr.defaults import DEFAULT_DIR

USAGE = "Usage: vndr <package...> [--dir <path>]"


@dataclass(slots=True)
class Context:
    inputs: list[str] = field(default_factory=list)
    dir: str = DEFAULT_DIR
    verbose: bool = False


def build_parser() -> argparse.ArgumentParser:
    epilog = textwrap.dedent(
        """
        INPUT FORMS
          https://github.com/<owner>/<repo>/blob/<ref>/<path>   single file, fetched raw
          https://github.com/<owner>/<repo>/tree/<ref>[/<path>] directory (or file) from a shallow clone
          https://<any other url>                               single file, named after the URL path
          <owner>/<repo>                                        whole repository, without .git
          <package>                                             npm package contents, without its dependencies

        Inputs are processed in order; the first failure stops the run with exit code 1.
        Set GITHUB_TOKEN to fetch raw files from private repositories.
        """
    )
    parser = argparse.ArgumentParser(
        prog="vndr",
        description="Vendor npm packages, GitHub repositories, GitHub paths or plain files into a local directory.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    parser.add_argument(
        "inputs",
        type=str,
        nargs="*",
        help="GitHub blob/tree URLs, other URLs, owner/repo tokens or npm package names.",
    )
    parser.add_argument(
        "-d",
        "--dir",
        type=str,
        default=DEFAULT_DIR,
        help=f"Target directory. Created if missing. Defaults to {DEFAULT_DIR}.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Log commands, fetched URLs and scratch directories.",
    )
    return parser


def parse_common_args(argv: list[str] | None = None) -> Context:
    # Options may appear before, between or after inputs.
    args = build_parser().parse_intermixed_args(argv)
    return Context(
        inputs=list(args.inputs or []),
        dir=args.dir,
        verbose=bool(args.verbose),
    )


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    # basicConfig is a no-op once the root logger has handlers.
    logging.getLogger().setLevel(level)


def build_config(
    ctx: Context,
    *,
    fetcher: HttpFetcher | None = None,
    vcs: VcsClient | None = None,
    installer: PackageInstaller | None = None,
    scratch_root: Path | None = None,
) -> VendorConfig:
    return VendorConfig(
        target_dir=Path(ctx.dir),
        fetcher=fetcher or RequestsFetcher(),
        vcs=vcs or GitCli(),
        installer=installer or NpmCli(),
        scratch_root=scratch_root,
    )
