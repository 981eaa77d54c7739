"""CLI entry point for roq."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from roq.batch import File, Fragment, Function, Inline, prove
from roq.config import Config
from roq.coq.coqtop import Coqtop
from roq.errors import InvalidInput, ProverError, TranslationError
from roq.syntax import FnItem, SyntaxDecodeError, function_from_dict
from roq.translate import translate_function, vernacular

EXIT_OK = 0
EXIT_PROVER = 1
EXIT_INPUT = 2


def read_function(path: str | Path) -> FnItem:
    """Load host function syntax from a JSON file.

    Raises:
        SyntaxDecodeError: If the file is unreadable or does not describe a
            host function
    """
    try:
        data = json.loads(Path(path).read_text())
    except (OSError, json.JSONDecodeError, RecursionError) as e:
        raise SyntaxDecodeError(f"Cannot load {path}: {e}") from e
    return function_from_dict(data)


def cmd_translate(args: argparse.Namespace, config: Config) -> int:
    """Print the Coq translation of a host function."""
    vern = vernacular(read_function(args.function))

    if args.json:
        print(json.dumps(vern.to_dict(), indent=2))
    else:
        print(vern, end="")
    return EXIT_OK


async def cmd_check(args: argparse.Namespace, config: Config) -> int:
    """Run coqtop over existing '.v' files."""
    prover = Coqtop.from_config(config)
    output = await prover.run_batch(args.files)
    print(output, end="")
    return EXIT_OK


async def cmd_prove(args: argparse.Namespace, config: Config) -> int:
    """Assemble fragments in command-line order and prove them."""
    fragments: list[Fragment] = []
    for tag, value in args.fragments or []:
        if tag == "inline":
            fragments.append(Inline(value))
        elif tag == "file":
            fragments.append(File(Path(value)))
        else:
            fragments.append(Function(translate_function(read_function(value))))

    if not fragments:
        raise InvalidInput("Nothing to prove: give at least one --function, --inline or --file")

    output = await prove(fragments, config=config)
    print(output, end="")
    return EXIT_OK


def _tagged(tag: str):
    def convert(value: str) -> tuple[str, str]:
        return (tag, value)

    return convert


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roq",
        description="roq: translate host functions to Coq and check proofs about them",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--env",
        type=str,
        default=None,
        help="Path to .env file",
    )

    parser.add_argument(
        "--coqtop",
        type=str,
        default=None,
        help="coqtop binary (default: ROQ_COQTOP or 'coqtop' on PATH)",
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for coqtop before killing it",
    )

    parser.add_argument(
        "--echo",
        action="store_true",
        help="Echo each batch to stderr before running it",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    translate = subparsers.add_parser("translate", help="Print the Coq translation of a host function")
    translate.add_argument("function", type=str, help="Host function syntax (JSON)")
    translate.add_argument("--json", action="store_true", help="Print the Coq AST as JSON")

    check = subparsers.add_parser("check", help="Run coqtop over '.v' files")
    check.add_argument("files", nargs="+", type=str, help="Coq vernacular files, loaded in order")

    prove_cmd = subparsers.add_parser("prove", help="Assemble fragments into one batch and prove it")
    prove_cmd.add_argument(
        "--function",
        "-f",
        dest="fragments",
        action="append",
        type=_tagged("function"),
        help="Host function syntax (JSON) to include as a Definition",
    )
    prove_cmd.add_argument(
        "--inline",
        "-i",
        dest="fragments",
        action="append",
        type=_tagged("inline"),
        help="Literal Coq text",
    )
    prove_cmd.add_argument(
        "--file",
        dest="fragments",
        action="append",
        type=_tagged("file"),
        help="Coq file whose contents are included verbatim",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = Config.from_env(Path(args.env) if args.env else None)
    if args.coqtop:
        config.coqtop_binary = args.coqtop
    if args.timeout is not None:
        config.timeout = args.timeout
    if args.echo:
        config.echo_batch = True
    if args.verbose:
        config.log_level = "DEBUG"

    logging.basicConfig(
        level=config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "translate":
            return cmd_translate(args, config)
        if args.command == "check":
            return asyncio.run(cmd_check(args, config))
        return asyncio.run(cmd_prove(args, config))
    except (SyntaxDecodeError, TranslationError, InvalidInput) as e:
        print(e, file=sys.stderr)
        return EXIT_INPUT
    except ProverError as e:
        print(f"coqtop failed ({type(e).__name__}):", file=sys.stderr)
        print(e, file=sys.stderr)
        return EXIT_PROVER


if __name__ == "__main__":
    sys.exit(main())
