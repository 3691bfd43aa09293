# tests/test_nav_node.py
"""
Tests for nav.node: quantization and NavNode cost bookkeeping.
"""

from __future__ import annotations

import logging

import pytest

from agent.logging_config import parse_level
from nav.node import NavNode, NodeKind, Vec3, quantize


def test_quantize_truncates_toward_zero():
    assert quantize(Vec3(299.0, 0.0, 150.0), 150) == (1, 1)
    assert quantize(Vec3(-10.0, 0.0, 149.9), 150) == (0, 0)
    assert quantize(Vec3(-160.0, 0.0, 0.0), 150) == (-1, 0)


def test_set_costs_keeps_total_in_sync():
    node = NavNode(Vec3(0.0, 0.0, 0.0), NodeKind.A_STAR)

    node.set_costs(300.0, 450.0)

    assert node.total_cost == 750.0
    assert node.cost_from_start == 300.0
    assert node.cost_to_goal == 450.0


def test_nodes_order_by_total_cost_and_compare_by_identity():
    a = NavNode(Vec3(0.0, 0.0, 0.0))
    b = NavNode(Vec3(0.0, 0.0, 0.0))
    a.set_costs(1.0, 1.0)
    b.set_costs(1.0, 2.0)

    assert a < b
    assert a <= b
    assert a != b
    assert a.same_cell(b, 150)


def test_same_cell_ignores_elevation():
    low = NavNode(Vec3(160.0, 0.0, 10.0))
    high = NavNode(Vec3(290.0, 900.0, 140.0))

    assert low.same_cell(high, 150)
    assert low.cell(150) == (1, 0)


def test_vec3_distances():
    a = Vec3(0.0, 0.0, 0.0)
    b = Vec3(3.0, 12.0, 4.0)

    assert a.planar_distance(b) == 5.0
    assert a.distance(b) == 13.0
    assert b - a == b


def test_parse_level_accepts_names_case_insensitively():
    assert parse_level("debug") == logging.DEBUG
    assert parse_level("WARNING") == logging.WARNING
    with pytest.raises(ValueError):
        parse_level("chatty")
