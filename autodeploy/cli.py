#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys

from .commands.adhoc_deploy import run_adhoc_mode
from .commands.profile_bot import run_profile_mode
from .config.logging_config import get_command_logger
from .config.settings import Settings, load_settings
from .exceptions import ConfigurationError


def _settings_from_args(args: argparse.Namespace) -> Settings:
    return load_settings(
        env_file=args.env_file,
        config_path=args.config,
        keys_path=args.keys_file,
        result_path=args.result_file,
        interval_seconds=args.interval,
        gas_limit=args.gas_limit,
        solc_version=args.solc_version,
        receipt_timeout=args.receipt_timeout,
        log_dir=args.log_dir,
    )


def cmd_profile(args: argparse.Namespace, settings: Settings) -> int:
    return run_profile_mode(settings, selection=args.profile, once=args.once)


def cmd_adhoc(args: argparse.Namespace, settings: Settings) -> int:
    return run_adhoc_mode(settings)


def _common_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--env-file", help="Path to a .env file to load (default: ./.env if present)")
    common.add_argument("--result-file", help="File that deployed addresses are appended to (default: hasilDeploy.txt)")
    common.add_argument("--gas-limit", type=int, help="Gas limit for every deployment (default: 3000000)")
    common.add_argument("--solc-version", help="solc release used to compile (default: 0.8.24)")
    common.add_argument("--receipt-timeout", type=float, help="Seconds to wait for each receipt (default: 120)")
    common.add_argument("--log-dir", help="Directory for log files (default: logs)")
    common.add_argument("--debug", action="store_true", help="Verbose logging with file/line details")
    return common


def build_parser() -> argparse.ArgumentParser:
    common = _common_parser()
    parser = argparse.ArgumentParser(
        prog="autodeploy",
        description="Compile a Solidity contract and deploy it repeatedly with one or more keys",
    )
    sub = parser.add_subparsers(dest="command")

    p_profile = sub.add_parser("profile", parents=[common], help="Deploy with every key from a configured profile, every few minutes")
    p_profile.add_argument("--config", help="Profiles file (default: config.json)")
    p_profile.add_argument("--keys-file", help="Private keys, one per line (default: privatekeys.txt)")
    p_profile.add_argument("--interval", type=float, help="Seconds between rounds (default: 300)")
    p_profile.add_argument("--profile", type=int, help="1-based profile number; skips the menu (0 exits)")
    p_profile.add_argument("--once", action="store_true", help="Run a single round and exit")
    p_profile.set_defaults(func=cmd_profile)

    p_adhoc = sub.add_parser("adhoc", parents=[common], help="Prompt for RPC, key, chain id and contract; deploy N times")
    p_adhoc.set_defaults(func=cmd_adhoc, config=None, keys_file=None, interval=None)

    # Bare `autodeploy` behaves like `autodeploy profile` with default flags
    parser.set_defaults(
        func=cmd_profile,
        config=None,
        keys_file=None,
        interval=None,
        profile=None,
        once=False,
        env_file=None,
        result_file=None,
        gas_limit=None,
        solc_version=None,
        receipt_timeout=None,
        log_dir=None,
        debug=False,
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = _settings_from_args(args)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    get_command_logger(args.command or "profile", debug=args.debug, log_dir=settings.log_dir)
    return int(args.func(args, settings))


if __name__ == "__main__":
    raise SystemExit(main())
