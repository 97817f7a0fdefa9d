"""
Interactive sorting demo.

Usage:
    sortlab [--size N] [--method NAME] [--seed S] [--dist DIST] [--config FILE]
    python -m sortlab ...

Flow:
    Enter array size  ->  print initial sequence  ->  Sorting Method loop
    ->  sort in place (prints step count and elapsed time)  ->  print result

Method names are case-insensitive. "help" lists the five methods; anything
else that is not a method name re-prompts.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence, TextIO, Tuple

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from sortlab.algorithms import METHOD_LABELS, MethodSpec, get_sort, normalize_method, resolve_method
from sortlab.bench.measure import SortReport
from sortlab.config import Settings, load_settings
from sortlab.datasets import SUPPORTED_DISTS, make_sequence
from sortlab.validate import check_sorted

logger = logging.getLogger(__name__)

SIZE_PROMPT = "Enter array size: "
METHOD_PROMPT = "Sorting Method: "
INVALID_SIZE_MSG = "Please enter a positive whole number"
INVALID_METHOD_MSG = "Please enter valid sorting method (enter HELP for list)"


# ------------------------- formatting ------------------------- #

def format_sequence(xs: Sequence[int], max_print: int = 0) -> str:
    """Space-separated values; with max_print > 0, longer sequences are cut short."""
    if max_print and len(xs) > max_print:
        head = " ".join(str(x) for x in xs[:max_print])
        return f"{head} ... ({len(xs) - max_print} more)"
    return " ".join(str(x) for x in xs)


# ------------------------- prompts ------------------------- #

def _read_line(console: Console, prompt: str, stream: TextIO) -> str:
    line = console.input(prompt, stream=stream)
    if not line:
        raise EOFError(f"no input for prompt {prompt.strip()!r}")
    return line.strip()


def read_size(console: Console, stream: TextIO) -> int:
    while True:
        raw = _read_line(console, SIZE_PROMPT, stream)
        try:
            n = int(raw)
        except ValueError:
            console.print(INVALID_SIZE_MSG)
            continue
        if n < 1:
            console.print(INVALID_SIZE_MSG)
            continue
        return n


def read_method(console: Console, stream: TextIO) -> MethodSpec:
    """Prompt until a valid method name is given; "help" lists the names."""
    while True:
        name = normalize_method(_read_line(console, METHOD_PROMPT, stream))
        if name == "help":
            for label in METHOD_LABELS:
                console.print(label)
            continue
        spec = resolve_method(name)
        if spec is None:
            logger.debug("rejected method name %r", name)
            console.print(INVALID_METHOD_MSG)
            continue
        return spec


# ------------------------- session ------------------------- #

def run_session(
    settings: Settings,
    *,
    console: Console,
    stream: TextIO,
) -> Tuple[List[int], SortReport]:
    """
    Run one generate -> print -> select -> sort -> print round.

    Returns the sorted sequence and the sort's report.
    """
    n = settings.size if settings.size is not None else read_size(console, stream)

    seq = make_sequence(n, settings.seed, settings.dataset)
    console.print("Initial Array: " + format_sequence(seq, settings.max_print), markup=False, soft_wrap=True)

    if settings.method is not None:
        spec = resolve_method(settings.method)
        assert spec is not None
    else:
        spec = read_method(console, stream)

    before = list(seq)
    sort = get_sort(spec.name)
    report = sort(seq, sink=console.print)
    check_sorted(before, seq)

    console.print("Sorted Array: " + format_sequence(seq, settings.max_print), markup=False, soft_wrap=True)
    return seq, report


# ------------------------- CLI ------------------------- #

def _positive_int(text: str) -> int:
    try:
        n = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}")
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1: {n}")
    return n


def _method_name(text: str) -> str:
    spec = resolve_method(text)
    if spec is None:
        raise argparse.ArgumentTypeError(
            f"unknown method {text!r} (choose from {', '.join(label.lower() for label in METHOD_LABELS)})"
        )
    return spec.name


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="sortlab", description="Sort a shuffled sequence and count the steps.")
    p.add_argument("--size", type=_positive_int, default=None, help="Array size (prompted if omitted)")
    p.add_argument("--method", type=_method_name, default=None, help="Sorting method (prompted if omitted)")
    p.add_argument("--seed", type=int, default=None, help="RNG seed for the shuffle (default 0)")
    p.add_argument("--dist", choices=sorted(SUPPORTED_DISTS), default=None, help="Input distribution")
    p.add_argument("--config", type=str, default=None, help="YAML file with default settings")
    p.add_argument("--max-print", type=int, default=None, help="Print at most this many values per sequence")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    console = Console()
    err_console = Console(stderr=True)

    overrides = {
        "seed": args.seed,
        "size": args.size,
        "method": args.method,
        "max_print": args.max_print,
        "dataset": {"dist": args.dist} if args.dist else None,
    }
    try:
        settings = load_settings(args.config, overrides)
    except (OSError, ValueError) as e:
        err_console.print(f"[bold red]Invalid configuration:[/bold red] {escape(str(e))}")
        return 2

    logger.debug("settings: %s", settings)
    try:
        run_session(settings, console=console, stream=sys.stdin)
    except EOFError:
        console.print()
        err_console.print("[bold red]Input ended before a choice was made.[/bold red]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
