"""CLI entry point: run `cstreduce file.c` or `python -m cstreduce file.c`."""

import logging
import sys
from pathlib import Path
from typing import List, Optional


def main(argv: Optional[List[str]] = None) -> int:
    import argparse
    from .compiler.driver import ReductionDriver
    from .shared.serialization import serialize_module
    from .utils.config import DEFAULT_BACKEND, DEFAULT_MODULE_NAME, SUPPORTED_BACKENDS

    parser = argparse.ArgumentParser(prog="cstreduce", description="Reduce a C source file to its program model.")
    parser.add_argument("file", type=Path, help="Path to C source file")
    parser.add_argument("--backend", default=DEFAULT_BACKEND, choices=SUPPORTED_BACKENDS,
                        help=f"CST producer (default: {DEFAULT_BACKEND})")
    parser.add_argument("--module-name", default=DEFAULT_MODULE_NAME, help="Name of the resulting module")
    parser.add_argument("--partial", action="store_true",
                        help="Print the partial module when the reduction stops early")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log automaton transitions")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    path = args.file.resolve()
    if not path.is_file():
        sys.stderr.write(f"cstreduce: error: file not found: {path}\n")
        return 1

    try:
        driver = ReductionDriver(backend=args.backend, module_name=args.module_name)
    except ImportError as e:
        sys.stderr.write(f"cstreduce: error: backend '{args.backend}' unavailable ({e}); "
                         f"install cstreduce[{args.backend}]\n")
        return 1

    try:
        outcome = driver.reduce_file(path)
    except (OSError, UnicodeDecodeError) as e:
        sys.stderr.write(f"cstreduce: error: could not read file: {e}\n")
        return 1

    if not outcome.success:
        if outcome.reporter is not None and outcome.reporter.has_errors():
            sys.stderr.write(outcome.reporter.format_all_errors() + "\n")
        else:
            sys.stderr.write("cstreduce: reduction failed\n")
        if args.partial and outcome.module is not None:
            print(serialize_module(outcome.module))
        return 1

    print(serialize_module(outcome.module))
    return 0


if __name__ == "__main__":
    sys.exit(main())
