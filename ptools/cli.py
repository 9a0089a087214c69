#!/usr/bin/env python3
"""Command-line front end for ptools.

Reads text from a file or stdin, runs a chain of transforms over it and
prints the result. Each step runs its transform once and its output replaces
the shared buffer before the next step runs, as a card's promote button does.

Examples:
    echo '{"a": 1}' | ptools run jsonbtf -o jsonbtf.tab=4
    ptools run base64d,gzipd -i payload.txt
    ptools list
    ptools describe regexp
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

from ptools import config
from ptools.session.workspace import ToolSession
from ptools.transforms.registry import get_transform_registry

logger = logging.getLogger(__name__)


def parse_option_args(option_args: list[str]) -> list[tuple[str, str, str]]:
    """Parse ``NAME.KEY=VALUE`` arguments into (name, key, value) triples."""
    parsed = []
    for arg in option_args:
        target, sep, value = arg.partition("=")
        name, dot, key = target.partition(".")
        if not sep or not dot or not name or not key:
            raise ValueError(f"Option must look like NAME.KEY=VALUE, got '{arg}'")
        parsed.append((name, key, value))
    return parsed


async def run_chain(
    names: list[str],
    text: str,
    option_args: Optional[list[tuple[str, str, str]]] = None,
) -> tuple[bool, str]:
    """Run ``names`` in order over ``text``, promoting each step's output.

    Returns:
        (True, final buffer) on success, or (False, failure message)
    """
    option_args = option_args or []
    step_options: dict[str, dict[str, str]] = {}
    for name, key, value in option_args:
        if name not in names:
            raise ValueError(f"Option given for '{name}', which is not in the chain")
        step_options.setdefault(name, {})[key] = value

    session = ToolSession(text=text)
    try:
        # One invocation per step; nothing stays mounted between steps
        for step, name in enumerate(names, start=1):
            result = await session.run_step(name, step_options.get(name))
            if result.failed:
                return False, f"step {step} ({name}): {result.text}"
            logger.debug(f"Step {step} ({name}) done")

        return True, session.text
    finally:
        await session.settle()
        session.close()


def cmd_list(args) -> int:
    registry = get_transform_registry()
    for summary in registry.list_summaries():
        options = f" [{', '.join(summary.option_keys)}]" if summary.option_keys else ""
        print(f"{summary.name:<10} {summary.description}{options}")
    return 0


def cmd_describe(args) -> int:
    detail = get_transform_registry().get_detail(args.name)
    if detail is None:
        print(f"Unknown transform: {args.name}", file=sys.stderr)
        return 1
    print(f"{detail.name}: {detail.description}")
    for spec in detail.option_schema:
        line = f"  {spec.key} ({spec.kind.value}, default {spec.default!r})"
        if spec.label:
            line += f" - {spec.label}"
        if spec.kind.value == "RADIO":
            line += f" choices: {', '.join(spec.choice_values)}"
        print(line)
    return 0


def cmd_run(args) -> int:
    names = [n.strip() for n in args.chain.split(",") if n.strip()]
    if args.input:
        with open(args.input, "r", encoding="utf-8") as f:
            text = f.read()
    else:
        text = sys.stdin.read()

    try:
        option_args = parse_option_args(args.option)
        ok, output = asyncio.run(run_chain(names, text, option_args))
    except (KeyError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if not ok:
        print(output, file=sys.stderr)
        return 1
    sys.stdout.write(output if output.endswith("\n") else output + "\n")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="ptools",
        description="Apply and chain text transforms",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--log-level",
        default=config.LOG_LEVEL,
        help="Logging level (default from PTOOLS_LOG_LEVEL, else INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List transforms in display order")

    describe = subparsers.add_parser("describe", help="Show a transform's options")
    describe.add_argument("name", help="Transform name (e.g., jsonbtf)")

    run = subparsers.add_parser("run", help="Run a chain of transforms")
    run.add_argument(
        "chain",
        help="Comma-separated transform names, applied left to right",
    )
    run.add_argument(
        "-i", "--input",
        help="Read input from this file instead of stdin",
    )
    run.add_argument(
        "-o", "--option",
        action="append",
        default=[],
        metavar="NAME.KEY=VALUE",
        help="Set an option on every step of the chain running NAME",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format=config.LOG_FORMAT,
        stream=sys.stderr,
    )

    handlers = {"list": cmd_list, "describe": cmd_describe, "run": cmd_run}
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
