"""Command line entry point for retrypolicy."""

from __future__ import annotations

import argparse
import subprocess
import sys
from typing import List, Optional, Sequence

from .config import Settings
from .errors import InvalidPolicyError, MaxAttemptExceededError
from .policy import RetryPolicy
from .predicates import retry_on


class CommandFailed(Exception):
    def __init__(self, argv: Sequence[str], returncode: int) -> None:
        super().__init__(f"{' '.join(argv)} exited with {returncode}")
        self.argv = list(argv)
        self.returncode = returncode


def _exit_code_predicate(codes: Optional[List[int]]):
    def should_retry(exc: BaseException) -> bool:
        if not isinstance(exc, CommandFailed):
            return False
        return not codes or exc.returncode in codes

    return should_retry


def _run_command(argv: Sequence[str]) -> int:
    completed = subprocess.run(list(argv), check=False)
    return completed.returncode


def cmd_run(args: argparse.Namespace) -> int:
    argv = list(args.command)
    if argv and argv[0] == "--":
        argv = argv[1:]
    if not argv:
        print("[ERROR] No command given.")
        return 2

    policy = RetryPolicy(
        _exit_code_predicate(args.retry_exit_code),
        args.max_attempts,
        args.initial_delay_ms,
        args.max_delay_ms,
    )
    attempt = 0

    def operation() -> int:
        nonlocal attempt
        attempt += 1
        returncode = _run_command(argv)
        if returncode != 0:
            print(f"[retrypolicy] attempt {attempt}/{args.max_attempts}: exit code {returncode}")
            raise CommandFailed(argv, returncode)
        return returncode

    try:
        return policy.execute(operation)
    except OSError as exc:
        print(f"[ERROR] Could not run {argv[0]}: {exc}")
        return 127
    except MaxAttemptExceededError as exc:
        print(f"[ERROR] {exc}")
        return exc.err.returncode if isinstance(exc.err, CommandFailed) else 1
    except CommandFailed as exc:
        print(f"[ERROR] {exc} (not retried)")
        return exc.returncode


def cmd_fetch(args: argparse.Namespace) -> int:
    try:
        from .fetcher import RETRYABLE_ERRORS, Fetcher, HTTPStatusError
    except ImportError as exc:
        raise ImportError("fetch requires the 'http' extra: pip install retrypolicy[http]") from exc

    policy = RetryPolicy(
        retry_on(*RETRYABLE_ERRORS),
        args.max_attempts,
        args.initial_delay_ms,
        args.max_delay_ms,
    )
    fetcher = Fetcher(policy=policy, timeout=args.timeout)
    try:
        result = fetcher.fetch(args.url)
    except MaxAttemptExceededError as exc:
        print(f"[ERROR] {exc}")
        return 1
    except HTTPStatusError as exc:
        print(f"[ERROR] {exc}")
        return 1
    sys.stdout.write(result.text)
    return 0


def build_parser(defaults: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser("retrypolicy", description="Run commands and fetch URLs with retries.")
    parser.add_argument("--max-attempts", type=int, default=defaults.max_attempts, help="Total attempts, first one included.")
    parser.add_argument("--initial-delay-ms", type=int, default=defaults.initial_delay_ms, help="Initial backoff bound in ms.")
    parser.add_argument("--max-delay-ms", type=int, default=defaults.max_delay_ms, help="Backoff bound ceiling in ms.")
    subparsers = parser.add_subparsers(dest="subcommand", required=True)

    run_parser = subparsers.add_parser("run", help="Run a command until it exits 0.")
    run_parser.add_argument(
        "--retry-exit-code",
        type=int,
        action="append",
        default=None,
        help="Exit code worth retrying; repeatable. Defaults to every non-zero code.",
    )
    run_parser.add_argument("command", nargs=argparse.REMAINDER, help="Command and its arguments.")
    run_parser.set_defaults(handler=cmd_run)

    fetch_parser = subparsers.add_parser("fetch", help="Fetch a URL and print the body.")
    fetch_parser.add_argument("url", help="Target URL")
    fetch_parser.add_argument("--timeout", type=int, default=defaults.timeout, help="Request timeout in seconds.")
    fetch_parser.set_defaults(handler=cmd_fetch)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser(Settings.from_env())
    args = parser.parse_args(argv)
    try:
        return args.handler(args)
    except InvalidPolicyError as exc:
        print(f"[ERROR] {exc}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
