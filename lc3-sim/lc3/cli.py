"""Command-line launcher: lc3-sim IMAGE [IMAGE ...]"""
import argparse
import logging
import signal
import sys
import threading

from .cpu_core import CPU, MachineState
from .errors import Cancelled, ImageLoadError, VMError
from .terminal import TerminalIO, raw_mode

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_FAULT = 3
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lc3-sim",
        description="LC-3 virtual machine. Loads object images in order and runs from x3000.")
    parser.add_argument("images", nargs="+", metavar="IMAGE",
                        help="object file(s); later images overwrite earlier ones")
    parser.add_argument("--gui", action="store_true", help="open the Qt window instead of the terminal")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="more log output on stderr (-vv for debug)")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="explicit log level, overrides -v")
    return parser


def setup_logging(verbose: int = 0, level: str = None):
    if level is None:
        level = ["WARNING", "INFO", "DEBUG"][min(verbose, 2)]
    logging.basicConfig(stream=sys.stderr, level=getattr(logging, level),
                        format="%(levelname)s %(name)s: %(message)s")


def load_images(cpu: CPU, paths) -> bool:
    for path in paths:
        try:
            origin = cpu.load_image(path)
        except ImageLoadError as e:
            log.debug("%s", e)
            print(f"failed to load image: {path}", file=sys.stderr)
            return False
        log.info("loaded %s at x%04X", path, origin)
    return True


def run_terminal(cpu: CPU, cancel: threading.Event) -> int:
    def on_sigint(signum, frame):
        cancel.set()

    previous = signal.signal(signal.SIGINT, on_sigint)
    try:
        with raw_mode():
            state = cpu.run(cancel)
    except Cancelled:
        state = cpu.state
    except EOFError:
        log.error("console input closed while waiting for a key")
        return EXIT_ERROR
    except VMError as e:
        log.error("%s", e)
        return EXIT_FAULT
    finally:
        signal.signal(signal.SIGINT, previous)
        cpu.io.flush()

    if state is MachineState.HALTED:
        return EXIT_OK
    log.warning("interrupted at PC=x%04X", cpu.reg.pc)
    return EXIT_INTERRUPTED


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)   # exits 2 without images
    setup_logging(args.verbose, args.log_level)

    if args.gui:
        from lc3gui.main_window import run
        return run(args.images)

    cancel = threading.Event()
    cpu = CPU(TerminalIO(cancel=cancel))
    if not load_images(cpu, args.images):
        return EXIT_ERROR
    return run_terminal(cpu, cancel)


if __name__ == "__main__":
    sys.exit(main())
