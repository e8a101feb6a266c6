"""Connection graph: intra-region MST plus extras, and inter-region gateways.

Intra-region edges make each region a connected graph; a second MST over
region centers (plus a couple of redundant borders) decides which regions
share gateway links. Fuel cost is distance normalized by the mean intra-
region MST edge length, so costs are comparable across map scales.
"""

from itertools import combinations
from typing import Dict, List, Sequence, Set, Tuple

import networkx as nx
from loguru import logger

from starbang.universe.models import (
    GeneratedConnection,
    GeneratedRegion,
    GeneratedSystem,
    Point,
)
from starbang.universe.params import GenerationParams
from starbang.universe.placement import distance
from starbang.universe.rng import RNG, rand_int, round_1dp

Edge = Tuple[int, int, float]


def euclidean_mst(points: Dict[int, Point]) -> List[Edge]:
    """Kruskal MST over the complete Euclidean graph of ``points``.

    Returns (a, b, distance) with ``a < b``, sorted by (distance, a, b).
    """
    if len(points) <= 1:
        return []
    G = nx.Graph()
    G.add_nodes_from(points)
    for a, b in combinations(sorted(points), 2):
        G.add_edge(a, b, weight=distance(points[a], points[b]))

    edges = []
    for a, b, data in nx.minimum_spanning_edges(G, algorithm="kruskal", data=True):
        if a > b:
            a, b = b, a
        edges.append((a, b, data["weight"]))
    edges.sort(key=lambda e: (e[2], e[0], e[1]))
    return edges


def fuel_cost(d: float, avg_distance: float, base_fuel: float, multiplier: float = 1.0) -> float:
    return max(1.0, round_1dp((d / avg_distance) * base_fuel * multiplier))


def _bidirectional(a: int, b: int, cost: float, is_gateway: bool = False) -> List[GeneratedConnection]:
    return [
        GeneratedConnection(from_system=a, to_system=b, fuel_cost=cost, is_gateway=is_gateway),
        GeneratedConnection(from_system=b, to_system=a, fuel_cost=cost, is_gateway=is_gateway),
    ]


def _members_by_region(
    systems: Sequence[GeneratedSystem], region_count: int
) -> List[List[GeneratedSystem]]:
    members: List[List[GeneratedSystem]] = [[] for _ in range(region_count)]
    for system in systems:
        members[system.region_index].append(system)
    return members


def build_intra_region_connections(
    rng: RNG,
    systems: Sequence[GeneratedSystem],
    region_count: int,
    params: GenerationParams,
) -> Tuple[List[GeneratedConnection], float]:
    """MST plus random short extras inside every region.

    Extra edges are drawn per region, in region order, from the shortest
    non-MST pairs: the pool holds ``min(len(pairs), extra * 3)`` pairs and
    each pick is a ``rand_int`` over what remains of it.

    Returns:
        (connections, avg_intra_edge_distance)
    """
    members = _members_by_region(systems, region_count)
    trees: List[List[Edge]] = []
    for region_systems in members:
        trees.append(euclidean_mst({s.index: s.position for s in region_systems}))

    mst_lengths = [d for tree in trees for _, _, d in tree]
    if mst_lengths:
        avg = sum(mst_lengths) / len(mst_lengths)
    else:
        avg = params.poisson_min_distance

    base_fuel = params.intra_region_base_fuel
    connections: List[GeneratedConnection] = []
    for region_systems, tree in zip(members, trees):
        in_tree: Set[Tuple[int, int]] = set()
        for a, b, d in tree:
            in_tree.add((a, b))
            connections.extend(_bidirectional(a, b, fuel_cost(d, avg, base_fuel)))

        extra = int(len(tree) * params.extra_edge_fraction)
        if extra <= 0:
            continue

        positions = {s.index: s.position for s in region_systems}
        pairs = [
            (a, b, distance(positions[a], positions[b]))
            for a, b in combinations(sorted(positions), 2)
            if (a, b) not in in_tree
        ]
        pairs.sort(key=lambda e: (e[2], e[0], e[1]))
        pool = pairs[: min(len(pairs), extra * 3)]

        for _ in range(min(extra, len(pool))):
            slot = rand_int(rng, 0, len(pool) - 1)
            a, b, d = pool[slot]
            pool[slot] = pool[-1]
            pool.pop()
            connections.extend(_bidirectional(a, b, fuel_cost(d, avg, base_fuel)))

    return connections, avg


def build_region_graph(
    regions: Sequence[GeneratedRegion], extra_borders: int = 2
) -> List[Tuple[int, int]]:
    """Region borders: MST over centers plus the shortest non-MST pairs."""
    centers = {r.index: r.center for r in regions}
    tree = euclidean_mst(centers)
    borders = [(a, b) for a, b, _ in tree]
    in_tree = set(borders)

    others = [
        (a, b, distance(centers[a], centers[b]))
        for a, b in combinations(sorted(centers), 2)
        if (a, b) not in in_tree
    ]
    others.sort(key=lambda e: (e[2], e[0], e[1]))
    borders.extend((a, b) for a, b, _ in others[:extra_borders])
    return borders


def build_gateway_connections(
    systems: Sequence[GeneratedSystem],
    regions: Sequence[GeneratedRegion],
    params: GenerationParams,
    avg_distance: float,
) -> List[GeneratedConnection]:
    """Link bordering regions through their closest system pairs.

    Marks both endpoints of every chosen pair as gateways. Consumes no draws.
    """
    members = _members_by_region(systems, len(regions))
    base_fuel = params.intra_region_base_fuel
    multiplier = params.gateway_fuel_multiplier
    connections: List[GeneratedConnection] = []

    for ra, rb in build_region_graph(regions, params.region_extra_borders):
        pairs = [
            (distance(sa.position, sb.position), sa.index, sb.index)
            for sa in members[ra]
            for sb in members[rb]
        ]
        if not pairs:
            logger.warning(f"Border {ra}-{rb} has an empty side; no gateway placed")
            continue
        pairs.sort()

        claimed: Set[int] = set()
        chosen = 0
        for d, a, b in pairs:
            if chosen >= params.gateways_per_border:
                break
            if a in claimed or b in claimed:
                continue
            claimed.update((a, b))
            systems[a].is_gateway = True
            systems[b].is_gateway = True
            connections.extend(
                _bidirectional(a, b, fuel_cost(d, avg_distance, base_fuel, multiplier), True)
            )
            chosen += 1
        logger.debug(f"Border {ra}-{rb}: {chosen} gateway pair(s)")

    return connections


def build_system_graph(
    connections: Sequence[GeneratedConnection], gateways: bool = True
) -> nx.DiGraph:
    G = nx.DiGraph()
    for c in connections:
        if c.is_gateway and not gateways:
            continue
        G.add_edge(c.from_system, c.to_system, fuel_cost=c.fuel_cost)
    return G


def region_adjacency_graph(
    systems: Sequence[GeneratedSystem],
    connections: Sequence[GeneratedConnection],
    region_count: int,
) -> nx.Graph:
    """Undirected region graph induced by gateway connections."""
    G = nx.Graph()
    G.add_nodes_from(range(region_count))
    for c in connections:
        if c.is_gateway:
            G.add_edge(systems[c.from_system].region_index, systems[c.to_system].region_index)
    return G


def check_connectivity(
    systems: Sequence[GeneratedSystem], connections: Sequence[GeneratedConnection]
) -> bool:
    """True when every system can reach every other one."""
    if not systems:
        return True
    G = build_system_graph(connections)
    G.add_nodes_from(s.index for s in systems)
    return nx.is_strongly_connected(G)
