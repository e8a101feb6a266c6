"""Spatial placement: region centers, blue-noise system scatter, partitioning.

Draw order (per call):
- ``generate_regions``: per region, x then y per attempt (or two jitter
  draws on fallback); then one government draw per region; then one draw
  per missing government type during coverage repair.
- ``bridson_sample``: two draws for the seed point, then per iteration one
  draw for the active index and two per candidate (angle, radius).
- ``assign_regions`` and ``repair_empty_regions`` consume no draws.
"""

import math
from typing import Dict, List, Sequence, Tuple

from loguru import logger

from starbang.universe.catalog import GOVERNMENT_WEIGHTS, GovernmentType
from starbang.universe.models import GeneratedRegion, Point
from starbang.universe.params import GenerationParams
from starbang.universe.rng import RNG, pick_uniform, weighted_pick


def distance(a: Point, b: Point) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def _region_name(names: Sequence[str], index: int, used: set) -> str:
    name = names[index % len(names)]
    if name in used:
        name = f"{name}-{index + 1}"
    used.add(name)
    return name


def place_region_centers(
    rng: RNG, params: GenerationParams
) -> Tuple[List[Point], int]:
    """Rejection-sample region centers, falling back to a jittered grid.

    Returns:
        (centers, fallback_count) where fallback_count is the number of
        regions that used the grid cell instead of a sampled position.
    """
    pad = params.padding
    span = params.map_size - 2 * pad
    cols = math.ceil(math.sqrt(params.region_count))
    cell = span / cols

    centers: List[Point] = []
    fallbacks = 0
    for i in range(params.region_count):
        placed = None
        for _ in range(params.max_placement_attempts):
            x = pad + rng() * span
            y = pad + rng() * span
            if all(distance((x, y), c) >= params.region_min_distance for c in centers):
                placed = (x, y)
                break

        if placed is None:
            row, col = divmod(i, cols)
            x = pad + col * cell + cell / 2 + (rng() - 0.5) * cell * 0.3
            y = pad + row * cell + cell / 2 + (rng() - 0.5) * cell * 0.3
            placed = (x, y)
            fallbacks += 1
            logger.warning(
                "Region {} placed on jittered grid after {} attempts",
                i,
                params.max_placement_attempts,
            )
        centers.append(placed)
    return centers, fallbacks


def ensure_government_coverage(rng: RNG, governments: List[GovernmentType]) -> int:
    """Reassign duplicated governments so every type appears at least once.

    Only possible when there are at least as many regions as types; with
    fewer regions the list is left as is. Returns the number of swaps.
    """
    swaps = 0
    for government in GovernmentType:
        if government in governments:
            continue
        counts: Dict[GovernmentType, int] = {}
        for g in governments:
            counts[g] = counts.get(g, 0) + 1
        candidates = [i for i, g in enumerate(governments) if counts[g] > 1]
        if not candidates:
            break
        chosen = pick_uniform(rng, candidates)
        governments[chosen] = government
        swaps += 1
    return swaps


def generate_regions(
    rng: RNG,
    params: GenerationParams,
    names: Sequence[str],
) -> Tuple[List[GeneratedRegion], int]:
    """Place ``params.region_count`` regions. Never fails.

    Returns:
        (regions, placement_fallbacks)
    """
    centers, fallbacks = place_region_centers(rng, params)
    governments = [weighted_pick(rng, GOVERNMENT_WEIGHTS) for _ in centers]
    swaps = ensure_government_coverage(rng, governments)
    if swaps:
        logger.debug(f"Government coverage repair reassigned {swaps} region(s)")

    used: set = set()
    regions = [
        GeneratedRegion(
            index=i,
            name=_region_name(names, i, used),
            government=governments[i],
            x=x,
            y=y,
        )
        for i, (x, y) in enumerate(centers)
    ]
    return regions, fallbacks


def bridson_sample(
    rng: RNG,
    width: float,
    height: float,
    min_dist: float,
    k: int,
    padding: float,
    max_points: int,
) -> List[Point]:
    """Poisson-disk scatter (Bridson) inside ``[padding, size - padding)``.

    Every returned pair of points is at least ``min_dist`` apart and at most
    ``max_points`` points are produced.
    """
    if max_points <= 0:
        return []

    cell = min_dist / math.sqrt(2)
    cols = math.ceil(width / cell)
    rows = math.ceil(height / cell)
    grid: List[int] = [-1] * (cols * rows)
    min_dist_sq = min_dist * min_dist

    def in_bounds(x: float, y: float) -> bool:
        return padding <= x < width - padding and padding <= y < height - padding

    def cell_of(x: float, y: float) -> Tuple[int, int]:
        return min(int(x / cell), cols - 1), min(int(y / cell), rows - 1)

    def too_close(x: float, y: float) -> bool:
        cx, cy = cell_of(x, y)
        for gy in range(max(cy - 2, 0), min(cy + 3, rows)):
            for gx in range(max(cx - 2, 0), min(cx + 3, cols)):
                idx = grid[gy * cols + gx]
                if idx < 0:
                    continue
                px, py = points[idx]
                if (px - x) ** 2 + (py - y) ** 2 < min_dist_sq:
                    return True
        return False

    def add(x: float, y: float) -> None:
        cx, cy = cell_of(x, y)
        grid[cy * cols + cx] = len(points)
        active.append(len(points))
        points.append((x, y))

    points: List[Point] = []
    active: List[int] = []

    x0 = padding + rng() * (width - 2 * padding)
    y0 = padding + rng() * (height - 2 * padding)
    if not in_bounds(x0, y0):
        return []
    add(x0, y0)

    while active and len(points) < max_points:
        slot = math.floor(rng() * len(active))
        px, py = points[active[slot]]
        found = False
        for _ in range(k):
            angle = rng() * 2 * math.pi
            radius = min_dist * (1 + rng())
            x = px + math.cos(angle) * radius
            y = py + math.sin(angle) * radius
            if in_bounds(x, y) and not too_close(x, y):
                add(x, y)
                found = True
                break
        if not found:
            # Swap-remove the exhausted point from the active list.
            active[slot] = active[-1]
            active.pop()

    return points


def assign_regions(
    points: Sequence[Point], regions: Sequence[GeneratedRegion]
) -> List[int]:
    """Index of the nearest region center for each point (ties: lower index)."""
    assignments = []
    for p in points:
        best, best_d = 0, math.inf
        for r in regions:
            d = distance(p, r.center)
            if d < best_d:
                best, best_d = r.index, d
        assignments.append(best)
    return assignments


def repair_empty_regions(
    points: Sequence[Point],
    assignments: List[int],
    regions: Sequence[GeneratedRegion],
) -> int:
    """Give every empty region the closest point it can take from a donor.

    A donor region must keep at least one system. Mutates ``assignments`` in
    place and returns the number of points moved.
    """
    moved = 0
    for region in regions:
        counts = [0] * len(regions)
        for a in assignments:
            counts[a] += 1
        if counts[region.index] > 0:
            continue
        best, best_d = -1, math.inf
        for i, p in enumerate(points):
            if counts[assignments[i]] < 2:
                continue
            d = distance(p, region.center)
            if d < best_d:
                best, best_d = i, d
        if best < 0:
            logger.warning(f"Region {region.name} left empty: no donor systems")
            continue
        logger.warning(
            f"Region {region.name} had no systems; took point {best} "
            f"from region {assignments[best]}"
        )
        assignments[best] = region.index
        moved += 1
    return moved
