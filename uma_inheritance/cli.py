"""Command-line driver for inheritance searches.

Steps an ``InheritanceSession`` window by window, printing what each window
found and asking whether to continue, reset, or stop.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, List, Optional, Sequence

from . import __version__
from .ingest.models import SearchResult
from .ingest.uma_moe import UmaMoeClient
from .orchestrator.session import InheritanceSession, SessionStatus, WindowOutcome
from .query_gen.search_query import DEFAULT_SORT, SORT_ALIASES, SearchQuery, resolve_sort
from .retrieval.batch_search import BatchSearch


logger = logging.getLogger(__name__)

Prompt = Callable[[str], str]


def _sort_arg(value: str) -> str:
    try:
        return resolve_sort(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="uma-inheritance",
        description="Search uma.moe for Umamusume: Pretty Derby inheritance records.",
    )
    parser.add_argument("--sire", type=int, required=True, help="Primary ancestor (sire) id.")
    parser.add_argument("--grand-sire", type=int, default=None, help="Grandsire id to filter on.")
    parser.add_argument("--grand-dam", type=int, default=None, help="Granddam id to filter on.")
    parser.add_argument(
        "-s",
        "--sort",
        type=_sort_arg,
        default=DEFAULT_SORT,
        help=f"Result ordering: {', '.join(SORT_ALIASES)} (default: rank).",
    )
    parser.add_argument("--timeout", type=float, default=30.0, help="Per-request timeout in seconds.")
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Keep fetching windows without asking until the search is exhausted.",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def format_result(index: int, result: SearchResult) -> str:
    lineage = result.inheritance
    left = str(lineage.parent_left_id) if lineage else "-"
    right = str(lineage.parent_right_id) if lineage else "-"
    return f"{index:>4}. {result.account_id}  {result.trainer_name}  [{left} x {right}]"


def print_outcome(outcome: WindowOutcome, out=None) -> None:
    span = f"pages {outcome.first_page}-{outcome.last_page}"
    if outcome.new_items:
        print(f"Found {len(outcome.new_items)} new results in {span}.", file=out)
        offset = len(outcome.accumulated) - len(outcome.new_items)
        for index, result in enumerate(outcome.new_items, start=offset + 1):
            print(format_result(index, result), file=out)
    else:
        print(f"No new results in {span}.", file=out)


def _ask(prompt: Prompt, message: str) -> Optional[str]:
    try:
        return prompt(message).strip().lower()
    except (EOFError, KeyboardInterrupt):
        return None


def _ask_optional_id(prompt: Prompt, message: str, out=None) -> Optional[int]:
    while True:
        answer = _ask(prompt, message)
        if not answer:
            return None
        try:
            return int(answer)
        except ValueError:
            print(f"'{answer}' is not a numeric id.", file=out)


def _prompt_new_query(prompt: Prompt, current: SearchQuery, out=None) -> SearchQuery:
    sire = _ask_optional_id(prompt, f"Sire id [{current.sire_id}]: ", out=out)
    grand_sire = _ask_optional_id(prompt, "Grandsire id (blank to skip): ", out=out)
    grand_dam = None
    if grand_sire is not None:
        grand_dam = _ask_optional_id(prompt, "Granddam id (blank to skip): ", out=out)
    return SearchQuery(
        sire if sire is not None else current.sire_id,
        grand_sire,
        grand_dam,
        current.sort_by,
    )


def run_session(
    session: InheritanceSession,
    prompt: Prompt = input,
    auto_advance: bool = False,
    out=None,
) -> List[SearchResult]:
    """Drive ``session`` until it is exhausted or the user stops it."""

    print(f"Searching inheritance records for {session.query.describe()}...", file=out)
    while True:
        outcome = session.step()
        print_outcome(outcome, out=out)

        if outcome.status is SessionStatus.EXHAUSTED_EMPTY:
            print(
                f"No results found for {session.query.describe()} after "
                f"{session.max_consecutive_fails} attempts.",
                file=out,
            )
            return []
        if outcome.status is SessionStatus.EXHAUSTED_STALLED:
            print(
                f"No new results for {session.query.describe()} after "
                f"{session.max_consecutive_fails} consecutive attempts; "
                f"stopping with {len(outcome.accumulated)} results.",
                file=out,
            )
            return outcome.accumulated

        if auto_advance:
            session.advance()
            continue

        choice = _ask(prompt, "[n]ext / [r]eset / [s]top: ")
        if choice is None or choice.startswith("s"):
            results = session.stop()
            print(f"Stopped with {len(results)} results.", file=out)
            return results
        if choice.startswith("r"):
            session.reset(_prompt_new_query(prompt, session.query, out=out))
            print(f"Searching inheritance records for {session.query.describe()}...", file=out)
            continue
        session.advance()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.grand_dam is not None and args.grand_sire is None:
        parser.error("--grand-dam requires --grand-sire")
    _configure_logging(args.verbose)

    client = UmaMoeClient(request_timeout=args.timeout)
    search = BatchSearch(client)
    query = SearchQuery(args.sire, args.grand_sire, args.grand_dam, args.sort)
    session = InheritanceSession(search, query)

    logger.debug("cli.start", extra={"query": query.describe(), "sort_by": query.sort_by})
    run_session(session, auto_advance=args.yes)
    return 0


if __name__ == "__main__":
    sys.exit(main())
