"""Edge-list ingestion from text.

Each line is matched against a regular expression with the named groups
``from`` and ``to`` and the optional groups ``cost`` and ``cap``. Node names
receive dense ids in first-seen order through a `NameMap`.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List, Optional, Pattern, Tuple, Union

from netstar.config import DEFAULTS
from netstar.graph.compact_star import Arc, CompactNetwork, build_network
from netstar.graph.node_map import NameMap
from netstar.logging import get_logger

logger = get_logger(__name__)

_REQUIRED_GROUPS = ("from", "to")


def compile_pattern(pattern: Union[str, Pattern[str]]) -> Pattern[str]:
    """Compile ``pattern`` and check that it names the required groups.

    Raises:
        ValueError: If the pattern is invalid or lacks ``from``/``to`` groups.
    """
    try:
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    except re.error as exc:
        raise ValueError(f"Invalid edge pattern {pattern!r}: {exc}") from exc
    missing = [g for g in _REQUIRED_GROUPS if g not in regex.groupindex]
    if missing:
        raise ValueError(
            f"Edge pattern must define named groups {missing}: {regex.pattern!r}"
        )
    return regex


def _parse_number(text: Optional[str]) -> float:
    # Missing or malformed numbers read as 0.0
    if text is None:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return 0.0


def parse_line(
    line: str, regex: Pattern[str], name_map: NameMap
) -> Optional[Arc]:
    """Parse one line into an arc, assigning ids to new names.

    Returns:
        The arc, or None if the line does not match.
    """
    match = regex.match(line)
    if match is None:
        return None
    groups = match.groupdict()
    from_name, to_name = groups["from"], groups["to"]
    if from_name is None or to_name is None:
        return None
    return Arc(
        name_map.assign(from_name),
        name_map.assign(to_name),
        _parse_number(groups.get("cost")),
        _parse_number(groups.get("cap")),
    )


def edges_from_lines(
    lines: Iterable[str],
    pattern: Union[str, Pattern[str]] = DEFAULTS.pattern,
    undirected: bool = False,
    skip: int = 0,
    name_map: Optional[NameMap] = None,
) -> Tuple[List[Arc], NameMap]:
    """Parse an edge list.

    Args:
        lines: Input lines (trailing newlines are ignored).
        pattern: Regular expression with named groups ``from``, ``to`` and
            optionally ``cost`` and ``cap``.
        undirected: Add the reverse arc for every line.
        skip: Number of header lines to skip.
        name_map: Existing mapping to extend; a new one is created if None.

    Returns:
        Tuple of (arcs, name_map).

    Raises:
        ValueError: If a non-blank line does not match the pattern.
    """
    regex = compile_pattern(pattern)
    name_map = NameMap() if name_map is None else name_map
    arcs: List[Arc] = []

    for line_no, raw in enumerate(lines, start=1):
        if line_no <= skip:
            continue
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue
        arc = parse_line(line, regex, name_map)
        if arc is None:
            raise ValueError(f"Line {line_no} does not match edge pattern: {line!r}")
        arcs.append(arc)
        if undirected:
            arcs.append(Arc(arc.head, arc.tail, arc.cost, arc.capacity))

    logger.debug("Parsed %d arcs over %d nodes", len(arcs), len(name_map))
    return arcs, name_map


def edges_from_file(
    path: Union[str, Path],
    pattern: Union[str, Pattern[str]] = DEFAULTS.pattern,
    undirected: bool = False,
    skip: int = 0,
    name_map: Optional[NameMap] = None,
) -> Tuple[List[Arc], NameMap]:
    """Read an edge list from a file; see `edges_from_lines`.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If a non-blank line does not match the pattern.
    """
    with open(path, "r", encoding="utf-8") as fh:
        return edges_from_lines(
            fh, pattern=pattern, undirected=undirected, skip=skip, name_map=name_map
        )


def network_from_file(
    path: Union[str, Path],
    pattern: Union[str, Pattern[str]] = DEFAULTS.pattern,
    undirected: bool = False,
    skip: int = 0,
) -> Tuple[CompactNetwork, NameMap]:
    """Read an edge list from a file and build the network."""
    arcs, name_map = edges_from_file(
        path, pattern=pattern, undirected=undirected, skip=skip
    )
    network = build_network(len(name_map), arcs)
    logger.info(
        "Loaded %s: %d nodes, %d arcs", path, network.num_nodes(), network.num_arcs()
    )
    return network, name_map
