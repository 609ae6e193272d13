"""Command-line interface for netstar."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, List, Optional

from netstar.config import DEFAULTS
from netstar.graph.node_map import NameMap
from netstar.io import network_from_file
from netstar.logging import get_logger, set_global_log_level
from netstar.runner import (
    HEAPS,
    Algorithm,
    RankResult,
    SearchResult,
    ShortestPathResult,
    rank_rows,
    run_algorithm,
    search_rows,
    shortest_path_rows,
)

logger = get_logger(__name__)


def _format_table(
    headers: List[str],
    rows: List[List[str]],
    min_width: int = 8,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width

    Returns:
        Formatted table string
    """
    if not rows:
        return ""

    all_data = [headers] + rows
    col_widths = []
    for col_idx in range(len(headers)):
        max_width = max(len(str(row[col_idx])) for row in all_data)
        col_widths.append(max(max_width, min_width))

    def format_row(row_data: List[Any]) -> str:
        return "   " + " | ".join(
            f"{str(item):<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    for row in rows:
        lines.append(format_row(row))
    return "\n".join(lines)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s"; 75.2 -> "1m 15.2s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    if seconds < 60.0:
        return f"{seconds:.2f} s"
    minutes = int(seconds // 60)
    rem = seconds - minutes * 60
    return f"{minutes}m {rem:.1f}s"


def _lookup(name_map: NameMap, name: str, flag: str) -> int:
    index = name_map.index_of(name)
    if index is None:
        raise KeyError(f"{flag}: node '{name}' does not occur in the input")
    return index


def _print_result(
    result: Any,
    name_map: NameMap,
    limit: int,
    target: Optional[int],
) -> None:
    if isinstance(result, SearchResult):
        print(
            _format_table(
                ["pred", "node", "order"], search_rows(result, name_map, limit)
            )
        )
    elif isinstance(result, ShortestPathResult):
        print(
            _format_table(
                ["pred", "node", "distance"],
                shortest_path_rows(result, name_map, limit),
            )
        )
    elif isinstance(result, RankResult):
        print(_format_table(["node", "rank"], rank_rows(result, name_map, limit)))
        if target is None:
            print("No target node given.")
        else:
            rank = float(result.ranks[target])
            print(f"Rank of node {name_map.name_of(target)}: {rank} ({rank:e})")


def _run(args: argparse.Namespace) -> None:
    start_time = perf_counter()
    try:
        network, name_map = network_from_file(
            args.filename,
            pattern=args.pattern,
            undirected=args.undirected,
            skip=args.skip,
        )
        start = DEFAULTS.start_id
        if args.start_node is not None:
            start = _lookup(name_map, args.start_node, "--start-node")
        target = None
        if args.target_node is not None:
            target = _lookup(name_map, args.target_node, "--target-node")

        result = run_algorithm(
            network,
            args.algorithm,
            start=start,
            use_heap=args.use_heap,
            heap=args.heap,
            beta=args.beta,
            eps=args.eps,
        )
    except FileNotFoundError:
        print(f"ERROR: Input file not found: {args.filename}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to run {args.algorithm}: {e}")
        print(f"ERROR: Failed to run {args.algorithm}")
        print(f"  {type(e).__name__}: {e}")
        sys.exit(1)

    _print_result(result, name_map, args.limit, target)
    logger.info(
        f"{args.algorithm} completed in {_format_duration(perf_counter() - start_time)}"
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``netstar`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="netstar",
        description="Run graph algorithms on an edge-list file.",
    )
    parser.add_argument(
        "algorithm",
        choices=[a.value for a in Algorithm],
        help="Algorithm to run",
    )
    parser.add_argument("filename", type=Path, help="Edge-list file")
    parser.add_argument(
        "--pattern",
        default=DEFAULTS.pattern,
        help=(
            "Regular expression for one input line with named groups"
            " 'from', 'to' and optionally 'cost', 'cap'"
        ),
    )
    parser.add_argument(
        "--skip", type=int, default=DEFAULTS.skip, help="Number of header lines to skip"
    )
    parser.add_argument(
        "--undirected",
        action="store_true",
        help="Treat every line as an undirected edge (two arcs)",
    )
    parser.add_argument(
        "--start-node", default=None, help="Start node name (default: first node)"
    )
    parser.add_argument(
        "--target-node", default=None, help="Node whose rank is reported (pagerank)"
    )
    parser.add_argument(
        "--use-heap",
        action="store_true",
        help="Use a priority queue for Dijkstra instead of the array scan",
    )
    parser.add_argument(
        "--heap",
        choices=sorted(HEAPS),
        default="binary",
        help="Priority queue used with --use-heap",
    )
    parser.add_argument(
        "--beta",
        type=float,
        default=DEFAULTS.beta,
        help="PageRank teleport probability in [0, 1]",
    )
    parser.add_argument(
        "--eps",
        type=float,
        default=DEFAULTS.eps,
        help="PageRank convergence tolerance",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULTS.limit,
        help="Maximum number of result rows to print",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    verbosity.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    _run(args)


if __name__ == "__main__":
    main()
