import argparse
import logging
import sys
from typing import TextIO
from pydantic import ValidationError

from podmanveth.config import Settings, load_settings
from podmanveth.correlate import Correlator
from podmanveth.errors import ResolutionError
from podmanveth.table import render_table
from podmanveth.utils import missing_capabilities
from podmanveth import VERSION


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def build_parser(prog: str, show_ip: bool) -> argparse.ArgumentParser:
    description = "Show which containers are attached to which `veth` interfaces"
    if show_ip:
        description += ",\nalong with their IP addresses"
    parser = argparse.ArgumentParser(
        prog=prog,
        usage=f"{prog} [PODMAN PS OPTIONS] | [-h, --help]",
        description=description + ".",
        epilog="Output:\n    If stdout is not a tty, column headers are omitted.\n"
               "    The container CLI (podman or docker) is taken from PODMANVETH_RUNTIME.",
        add_help=False,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    _ = parser.add_argument("ps_args", nargs="*", metavar="PODMAN PS OPTIONS",
                            help="Pass any valid `podman ps` flags. Do not pass a '--format' flag.")
    _ = parser.add_argument("-h", "--help", action="store_true", help="Show this help and exit.")
    return parser


def configure_logging(level_name: str, stream: TextIO | None = None):
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.basicConfig(level=level_name, handlers=[handler], force=True)


def execute(filter_args: list[str],
            settings: Settings,
            out: TextIO,
            interactive: bool,
            correlator: Correlator | None = None,
            prog: str = "podmanveth") -> int:
    """Resolve every container, then print the table. Nothing is printed on failure"""
    if correlator is None:
        correlator = Correlator(settings)

    try:
        rows = correlator.build_rows(filter_args)
    except ResolutionError as e:
        print(f"{prog}: {e}", file=sys.stderr)
        return e.returncode

    _ = out.write(render_table(rows, show_header=interactive, show_ip=settings.show_ip))
    out.flush()
    return 0


def _main(argv: list[str] | None, prog: str, show_ip: bool) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Only a leading -h/--help is ours, everything else goes to `podman ps`
    if argv[:1] in (["-h"], ["--help"]):
        build_parser(prog, show_ip).print_help()
        return 0

    try:
        settings = load_settings(show_ip=show_ip)
    except ValidationError as e:
        print(f"{prog}: invalid configuration:\n{e}", file=sys.stderr)
        return 2

    configure_logging(settings.log_level)
    logger.debug("%s %s using %s", prog, VERSION, settings.runtime)

    missing = missing_capabilities()
    if missing:
        logger.warning("Missing %s; namespace inspection will likely fail. Try running as root.",
                       ", ".join(cap.name for cap in missing))

    return execute(argv, settings, sys.stdout, sys.stdout.isatty(), prog=prog)


def main(argv: list[str] | None = None) -> int:
    return _main(argv, "podmanveth", show_ip=False)


def main_ip(argv: list[str] | None = None) -> int:
    return _main(argv, "podmanveth-ip", show_ip=True)


if __name__ == "__main__":
    sys.exit(main())
