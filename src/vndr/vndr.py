from __future__ import annotations

import logging
import sys

from .cli_common import USAGE, Context, build_config, configure_logging, parse_common_args
from .core import Dispatcher, StdoutWriter, VendorConfig, Writer
from .errors import VndrError

logger = logging.getLogger(__name__)


def main(
    *,
    argv: list[str] | None = None,
    writer: Writer | None = None,
    config: VendorConfig | None = None,
) -> int:
    if argv is None:
        argv = sys.argv[1:]
    ctx: Context = parse_common_args(argv)
    configure_logging(ctx.verbose)

    if not ctx.inputs:
        sys.stderr.write(USAGE + "\n")
        return 1

    out_writer = writer or StdoutWriter()
    dispatcher = Dispatcher(config or build_config(ctx), out_writer)
    try:
        dispatcher.vendor_all(ctx.inputs)
    except (VndrError, OSError) as e:
        logger.debug("Vendoring aborted", exc_info=True)
        sys.stderr.write(f"Error: {e}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
