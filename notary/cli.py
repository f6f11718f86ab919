"""notary.cli

Command line interface entry point for starnotary.

Design constraints:
- argparse-based.
- Lazy imports: do not import heavy dependencies at parse time.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

EPILOG = "Block 0 remembers why the chain exists. Every block after it remembers who."


@dataclass(frozen=True)
class CliContext:
    repo_root: Path


def _repo_root_from_cwd() -> Path:
    return Path.cwd()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="starnotary",
        description="Notarize star ownership on an in-memory hash chain.",
        epilog=EPILOG,
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit.",
    )

    sub = parser.add_subparsers(dest="command")

    p_api = sub.add_parser("api", help="Start FastAPI server")
    p_api.add_argument("--host", default=None)
    p_api.add_argument("--port", type=int, default=None)

    sub.add_parser("wallet", help="Generate an Ed25519 wallet (address + private key)")

    p_challenge = sub.add_parser("challenge", help="Print a fresh ownership challenge")
    p_challenge.add_argument("address")

    p_sign = sub.add_parser("sign", help="Sign a challenge with an Ed25519 private key")
    p_sign.add_argument("--key", required=True, help="Private key hex")
    p_sign.add_argument("message")

    p_demo = sub.add_parser("demo", help="Run challenge -> sign -> submit in-process and print the chain")
    p_demo.add_argument("--star", default="Polaris")

    return parser


def _print_version() -> None:
    from notary import __version__

    print(f"starnotary v{__version__}")


def _load_config(ctx: CliContext):
    from notary.core.config import Config

    if (ctx.repo_root / "config" / "default.yaml").exists():
        return Config.from_repo_defaults(ctx.repo_root)
    return Config()


def _configure_logging(ctx: CliContext) -> None:
    config = _load_config(ctx)
    logging.basicConfig(level=config.logging.level.upper(), format=config.logging.format)


def _cmd_api(ctx: CliContext, args: argparse.Namespace) -> int:
    config = _load_config(ctx)

    host = args.host or config.api.host
    port = args.port or config.api.port

    import uvicorn

    uvicorn.run("api.main:app", host=host, port=port, reload=False)
    return 0


def _cmd_wallet(ctx: CliContext, args: argparse.Namespace) -> int:
    from notary.security.identity import generate_wallet

    wallet = generate_wallet()
    print(f"address: {wallet.address}")
    print(f"private_key: {wallet.private_key}")
    return 0


def _cmd_challenge(ctx: CliContext, args: argparse.Namespace) -> int:
    from notary.core.chain import Chain
    from notary.notarization import OwnershipNotary

    notary = OwnershipNotary.from_config(Chain(), _load_config(ctx))
    try:
        print(notary.issue_challenge(args.address))
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0


def _cmd_sign(ctx: CliContext, args: argparse.Namespace) -> int:
    from notary.security.identity import WalletIdentity

    try:
        wallet = WalletIdentity.from_private_key(args.key)
    except ValueError as e:
        print(f"error: invalid private key: {e}", file=sys.stderr)
        return 2
    print(wallet.sign(args.message))
    return 0


def _cmd_demo(ctx: CliContext, args: argparse.Namespace) -> int:
    from notary.core.chain import Chain
    from notary.core.exceptions import SubmitError
    from notary.core.views import BlockView
    from notary.notarization import OwnershipNotary
    from notary.security.identity import generate_wallet
    from notary.security.signatures import Ed25519Verifier

    config = _load_config(ctx)
    chain = Chain()
    notary = OwnershipNotary(
        chain,
        Ed25519Verifier(),
        window_seconds=config.notary.challenge_window_seconds,
        purpose_tag=config.notary.purpose_tag,
    )
    wallet = generate_wallet()

    challenge = notary.issue_challenge(wallet.address)
    try:
        notary.submit(wallet.address, challenge, wallet.sign(challenge), {"star": args.star})
    except SubmitError as e:
        print(f"demo failed: {e}", file=sys.stderr)
        return 1

    for block in chain.blocks():
        print(json.dumps(BlockView.from_block(block, trusted=True).model_dump(mode="json"), sort_keys=True))

    issues = chain.validate()
    print(f"issues: {len(issues)}")
    return 0 if not issues else 1


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        _print_version()
        return 0

    if not args.command:
        parser.print_help()
        return 2

    ctx = CliContext(repo_root=_repo_root_from_cwd())
    _configure_logging(ctx)

    dispatch: dict[str, Callable[[CliContext, argparse.Namespace], int]] = {
        "api": _cmd_api,
        "wallet": _cmd_wallet,
        "challenge": _cmd_challenge,
        "sign": _cmd_sign,
        "demo": _cmd_demo,
    }

    fn = dispatch.get(str(args.command))
    if fn is None:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 2

    return int(fn(ctx, args))


if __name__ == "__main__":
    raise SystemExit(main())
