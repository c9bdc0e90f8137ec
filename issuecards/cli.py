"""Run a single poll invocation from the command line."""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path

from issuecards.credentials import DEFAULT_SECRET_DIRS, MountedSecretStore
from issuecards.errors import PollError
from issuecards.invocation import InvocationDependencies, run_invocation
from issuecards.logging import configure_logging
from issuecards.pipeline import FailurePolicy


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="femtologging level (default: INFO)",
    )
    parser.add_argument(
        "--secret-dir",
        dest="secret_dirs",
        type=Path,
        action="append",
        default=None,
        help=(
            "Directory holding the github-accesstoken secret; repeat to add "
            "fallbacks (default: /var/openfaas/secrets then /run/secrets)"
        ),
    )
    parser.add_argument(
        "--continue-on-failure",
        action="store_true",
        help="Dispatch every card even after one fails",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Poll once and print the invocation response body.

    Parameters
    ----------
    argv : list[str] | None, optional
        Command-line arguments. ``None`` defaults to ``sys.argv``.

    Returns
    -------
    int
        Exit code: 0 when every issue was dispatched, 1 otherwise.

    """
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_level)

    deps = InvocationDependencies(
        secret_store=MountedSecretStore(args.secret_dirs or DEFAULT_SECRET_DIRS),
        policy=(
            FailurePolicy.CONTINUE
            if args.continue_on_failure
            else FailurePolicy.ABORT
        ),
    )
    try:
        result = asyncio.run(run_invocation(deps))
    except PollError as exc:
        print(exc)
        return 1

    print(result.summary())
    return 0 if result.succeeded else 1


if __name__ == "__main__":
    raise SystemExit(main())
