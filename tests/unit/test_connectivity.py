"""Tests for intra-region links, region borders and gateways."""

import networkx as nx
import pytest

from starbang.universe.catalog import EconomyType, GovernmentType
from starbang.universe.connectivity import (
    build_gateway_connections,
    build_intra_region_connections,
    build_region_graph,
    build_system_graph,
    check_connectivity,
    euclidean_mst,
    fuel_cost,
    region_adjacency_graph,
)
from starbang.universe.models import GeneratedRegion, GeneratedSystem
from starbang.universe.params import GenerationParams
from starbang.universe.placement import distance
from starbang.universe.rng import Mulberry32


def _system(index, x, y, region):
    return GeneratedSystem(
        index=index,
        name=f"S{index}",
        region_index=region,
        x=x,
        y=y,
        traits=[],
        economy_type=EconomyType.EXTRACTION,
    )


class TestEuclideanMst:
    def test_points_on_a_line(self):
        points = {0: (0.0, 0.0), 1: (10.0, 0.0), 2: (30.0, 0.0), 3: (60.0, 0.0)}
        assert euclidean_mst(points) == [(0, 1, 10.0), (1, 2, 20.0), (2, 3, 30.0)]

    def test_spans_all_points(self):
        points = {i: (float(i * 37 % 101), float(i * 53 % 97)) for i in range(25)}
        edges = euclidean_mst(points)
        assert len(edges) == 24
        G = nx.Graph((a, b) for a, b, _ in edges)
        assert nx.is_connected(G)
        assert set(G.nodes) == set(points)

    def test_trivial_inputs(self):
        assert euclidean_mst({}) == []
        assert euclidean_mst({3: (1.0, 1.0)}) == []


def test_fuel_cost_formula():
    assert fuel_cost(200, 200, 8) == 8.0
    assert fuel_cost(250, 200, 8) == 10.0
    assert fuel_cost(200, 200, 8, 2.5) == 20.0
    assert fuel_cost(123, 200, 8) == 4.9
    # Never below one.
    assert fuel_cost(1, 200, 8) == 1.0


class TestIntraRegion:
    def _systems(self):
        systems = []
        for i in range(7):
            systems.append(_system(i, 100.0 + i * 50, 100.0 + (i % 2) * 40, 0))
        for i in range(7, 12):
            systems.append(_system(i, 2000.0 + (i - 7) * 60, 2000.0, 1))
        return systems

    def test_edge_counts_per_region(self):
        systems = self._systems()
        connections, _ = build_intra_region_connections(
            Mulberry32(1), systems, 2, GenerationParams()
        )
        undirected = {tuple(sorted((c.from_system, c.to_system))) for c in connections}
        region0 = [e for e in undirected if e[0] < 7]
        region1 = [e for e in undirected if e[0] >= 7]
        # MST (n - 1) plus floor((n - 1) * 0.5) extras.
        assert len(region0) == 6 + 3
        assert len(region1) == 4 + 2
        assert len(connections) == 2 * len(undirected)

    def test_average_is_mean_mst_length(self):
        systems = [_system(0, 0, 0, 0), _system(1, 100, 0, 0), _system(2, 400, 0, 0)]
        params = GenerationParams(extra_edge_fraction=0)
        connections, avg = build_intra_region_connections(Mulberry32(1), systems, 1, params)
        assert avg == pytest.approx(200.0)
        costs = sorted({c.fuel_cost for c in connections})
        assert costs == [4.0, 12.0]

    def test_no_edges_leave_a_region(self):
        systems = self._systems()
        connections, _ = build_intra_region_connections(
            Mulberry32(5), systems, 2, GenerationParams()
        )
        for c in connections:
            assert systems[c.from_system].region_index == systems[c.to_system].region_index
            assert not c.is_gateway


def test_region_graph_adds_redundant_borders():
    regions = [
        GeneratedRegion(i, f"R{i}", GovernmentType.FRONTIER, x, y)
        for i, (x, y) in enumerate([(0, 0), (1000, 0), (0, 1000), (1000, 1000), (2000, 500)])
    ]
    borders = build_region_graph(regions, extra_borders=2)
    assert len(borders) == 4 + 2
    assert len(set(borders)) == len(borders)
    G = nx.Graph(borders)
    assert nx.is_connected(G)
    assert len(build_region_graph(regions, extra_borders=0)) == 4


def test_gateways_never_reuse_an_endpoint_on_a_border():
    regions = [
        GeneratedRegion(0, "West", GovernmentType.FEDERATION, 0, 0),
        GeneratedRegion(1, "East", GovernmentType.CORPORATE, 1000, 0),
    ]
    systems = [
        _system(0, 400, 0, 0),
        _system(1, 400, 100, 0),
        _system(2, 100, 0, 0),
        _system(3, 600, 0, 1),
        _system(4, 900, 0, 1),
    ]
    params = GenerationParams(gateways_per_border=3)
    connections = build_gateway_connections(systems, regions, params, avg_distance=200)

    pairs = {(c.from_system, c.to_system) for c in connections if c.from_system < c.to_system}
    # Only two systems in East, so at most two disjoint pairs.
    assert pairs == {(0, 3), (1, 4)}
    assert all(c.is_gateway for c in connections)
    assert [s.is_gateway for s in systems] == [True, True, False, True, True]
    cost = next(c.fuel_cost for c in connections if (c.from_system, c.to_system) == (0, 3))
    assert cost == fuel_cost(200, 200, params.intra_region_base_fuel, params.gateway_fuel_multiplier)


class TestGeneratedUniverseConnectivity:
    def test_each_region_internally_connected(self, universe):
        intra = build_system_graph(universe.connections, gateways=False)
        for region in universe.regions:
            members = {s.index for s in universe.systems_in_region(region.index)}
            if len(members) < 2:
                continue
            start = next(iter(members))
            assert nx.descendants(intra, start) | {start} == members

    def test_regions_connected_through_gateways(self, universe):
        G = region_adjacency_graph(universe.systems, universe.connections, len(universe.regions))
        assert nx.is_connected(G)

    def test_whole_universe_strongly_connected(self, universe):
        G = build_system_graph(universe.connections)
        assert G.number_of_nodes() == len(universe.systems)
        assert nx.is_strongly_connected(G)

    def test_connections_are_bidirectional(self, universe):
        edges = {(c.from_system, c.to_system): c.fuel_cost for c in universe.connections}
        for (a, b), cost in edges.items():
            assert edges[(b, a)] == cost

    def test_non_gateway_links_stay_in_region(self, universe):
        systems = universe.systems
        for c in universe.connections:
            if not c.is_gateway:
                assert systems[c.from_system].region_index == systems[c.to_system].region_index
            else:
                assert systems[c.from_system].region_index != systems[c.to_system].region_index

    def test_every_region_has_a_gateway(self, universe):
        for region in universe.regions:
            assert any(s.is_gateway for s in universe.systems_in_region(region.index))

    def test_fuel_costs_reasonable(self, universe):
        for c in universe.connections:
            assert 1 <= c.fuel_cost < 200

    def test_gateway_cost_uses_multiplier(self, universe):
        params = GenerationParams()
        avg = universe.stats.avg_intra_edge_distance
        for c in universe.connections:
            if not c.is_gateway:
                continue
            d = distance(universe.systems[c.from_system].position, universe.systems[c.to_system].position)
            expected = fuel_cost(d, avg, params.intra_region_base_fuel, params.gateway_fuel_multiplier)
            assert c.fuel_cost == expected


def test_check_connectivity():
    systems = [_system(i, i * 100.0, 0.0, 0) for i in range(3)]
    connections, _ = build_intra_region_connections(Mulberry32(1), systems, 1, GenerationParams())
    assert check_connectivity(systems, connections)
    # An isolated system breaks it.
    systems.append(_system(3, 5000.0, 5000.0, 1))
    assert not check_connectivity(systems, connections)
    assert check_connectivity([], [])


def test_generated_universe_passes_connectivity_check(universe):
    assert check_connectivity(universe.systems, universe.connections)
