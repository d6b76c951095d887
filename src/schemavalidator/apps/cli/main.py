from __future__ import annotations

import logging
import sys
from typing import Sequence

from schemavalidator.core.dispatch.dispatch import run_validation
from schemavalidator.core.options.load_options import load_options
from schemavalidator.core.validate.result import Failure

EXIT_OK = 0
EXIT_NG = 2


def _fail(failure: Failure) -> int:
    print(failure.render(), file=sys.stderr)
    return EXIT_NG


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run(argv: Sequence[str] | None = None) -> int:
    """Validate the input named on the command line; return the exit code.

    Validation findings are normal output (exit 0). Every Failure exits 2.
    """
    config = load_options(argv)
    if isinstance(config, Failure):
        return _fail(config)

    _setup_logging(config.verbose)

    failure = run_validation(config)
    if failure is not None:
        return _fail(failure)
    return EXIT_OK


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":
    main()
