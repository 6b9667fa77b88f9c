from __future__ import annotations

import numpy as np
import pytest

from quiver3d import (
    ArrowStyle,
    DegenerateDirectionError,
    InvalidArgumentShapeError,
    InvalidGeometryError,
    InvalidRangeError,
    UnknownColorNameError,
    build_quiver,
)
from quiver3d.quiver import broadcast_colors, broadcast_values

POSITIONS = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 2.0, -1.0]])
DIRECTIONS = np.array([[0.0, 0.0, 1.0], [3.0, 4.0, 0.0], [-1.0, -1.0, -2.0]])


def stem_length(arrow) -> float:
    return float(np.linalg.norm(arrow.stem.ring(-1).mean(axis=0) - arrow.stem.ring(0).mean(axis=0)))


def test_shared_red_is_broadcast(surface) -> None:
    quiver = build_quiver(POSITIONS, DIRECTIONS, "red", surface=surface)

    assert len(quiver) == 3
    for arrow, direction in zip(quiver, DIRECTIONS):
        np.testing.assert_allclose(arrow.color, [1, 0, 0])
        assert stem_length(arrow) == pytest.approx(0.75 * np.linalg.norm(direction))


def test_handles_table(surface) -> None:
    quiver = build_quiver(POSITIONS, DIRECTIONS, surface=surface)

    assert quiver.handles.shape == (3, 2)
    assert quiver.handles.tolist() == [[0, 1], [2, 3], [4, 5]]
    assert len(surface) == 6


def test_output_order_matches_input(surface) -> None:
    quiver = build_quiver(POSITIONS, DIRECTIONS, surface=surface)

    for i, arrow in enumerate(quiver):
        np.testing.assert_allclose(arrow.origin, POSITIONS[i])
        np.testing.assert_allclose(arrow.head.ring(-1)[0], POSITIONS[i] + DIRECTIONS[i], atol=1e-9)
    assert quiver[1] is quiver.arrows[1]


def test_per_arrow_styles(surface) -> None:
    colors = [[1, 0, 0], [0, 1, 0], [0, 0, 1]]
    ratios = [0.5, 0.6, 0.9]
    quiver = build_quiver(POSITIONS, DIRECTIONS, colors, stem_ratios=ratios, stem_radii=[0.01, 0.05, 0.1],
                          surface=surface)

    for arrow, color, ratio, direction in zip(quiver, colors, ratios, DIRECTIONS):
        np.testing.assert_allclose(arrow.color, color)
        assert stem_length(arrow) == pytest.approx(ratio * np.linalg.norm(direction))


def test_color_name_list(surface) -> None:
    quiver = build_quiver(POSITIONS, DIRECTIONS, ["y", "magenta", "C"], surface=surface)
    assert [arrow.color.tolist() for arrow in quiver] == [[1, 1, 0], [1, 0, 1], [0, 1, 1]]


def test_style_applies_to_batch(surface) -> None:
    quiver = build_quiver(POSITIONS, DIRECTIONS, style=ArrowStyle(color="w", stem_ratio=0.5), surface=surface)
    for arrow, direction in zip(quiver, DIRECTIONS):
        np.testing.assert_allclose(arrow.color, [1, 1, 1])
        assert stem_length(arrow) == pytest.approx(0.5 * np.linalg.norm(direction))


def test_threaded_build_matches_serial(surface) -> None:
    rng = np.random.default_rng(7)
    positions = rng.normal(size=(40, 3))
    directions = rng.normal(size=(40, 3))

    serial = build_quiver(positions, directions, surface=surface)
    threaded = build_quiver(positions, directions, surface=surface, workers=4)

    for a, b in zip(serial, threaded):
        np.testing.assert_allclose(a.vertices(), b.vertices())
    assert threaded.handles[0].tolist() == [80, 81]


def test_mismatched_counts_are_rejected(surface) -> None:
    with pytest.raises(InvalidArgumentShapeError):
        build_quiver(POSITIONS, DIRECTIONS[:2], surface=surface)
    assert len(surface) == 0


def test_color_rows_must_match_count(surface) -> None:
    with pytest.raises(InvalidArgumentShapeError):
        build_quiver(POSITIONS, DIRECTIONS, np.ones((2, 3)), surface=surface)


@pytest.mark.parametrize(
    "colors",
    [
        np.ones((3, 4)),
        [1, 0],
        ["r", "g"],
        np.ones((3, 3, 1)),
        [[1, 0, 0], [0, 1], [0, 0, 1]],
        ["r", (0, 1, 0), "b"],
        {"r": 1},
    ],
)
def test_bad_color_shapes(colors, surface) -> None:
    with pytest.raises(InvalidArgumentShapeError):
        build_quiver(POSITIONS, DIRECTIONS, colors, surface=surface)


def test_color_values_out_of_range(surface) -> None:
    with pytest.raises(InvalidRangeError):
        build_quiver(POSITIONS, DIRECTIONS, [[1, 0, 0], [0, 2, 0], [0, 0, 1]], surface=surface)


def test_unknown_color_name(surface) -> None:
    with pytest.raises(UnknownColorNameError):
        build_quiver(POSITIONS, DIRECTIONS, "orange", surface=surface)


@pytest.mark.parametrize("stem_ratios", [[0.5, 0.6], [0.5, 0.6, 0.7, 0.8], np.full((3, 1), 0.5)])
def test_bad_stem_ratio_lengths(stem_ratios, surface) -> None:
    with pytest.raises(InvalidArgumentShapeError):
        build_quiver(POSITIONS, DIRECTIONS, stem_ratios=stem_ratios, surface=surface)


def test_stem_values_out_of_range_fail_whole_batch(surface) -> None:
    with pytest.raises(InvalidRangeError):
        build_quiver(POSITIONS, DIRECTIONS, stem_ratios=[0.5, 1.0, 0.5], surface=surface)
    with pytest.raises(InvalidRangeError):
        build_quiver(POSITIONS, DIRECTIONS, stem_radii=[0.05, 0.05, 0.2], surface=surface)
    assert len(surface) == 0


def test_zero_direction_fails_before_building(surface) -> None:
    directions = DIRECTIONS.copy()
    directions[2] = 0.0

    with pytest.raises(DegenerateDirectionError, match="row 2"):
        build_quiver(POSITIONS, directions, surface=surface, workers=2)
    assert len(surface) == 0


@pytest.mark.parametrize(
    "positions",
    [np.zeros((3, 2)), np.zeros(3), np.zeros((0, 3)), [[0, 0, 0], [1, 0], [2, 0, 0]], [["a", 0, 0]] * 3],
)
def test_bad_position_shapes(positions, surface) -> None:
    with pytest.raises(InvalidArgumentShapeError):
        build_quiver(positions, DIRECTIONS, surface=surface)


def test_nan_positions(surface) -> None:
    positions = POSITIONS.copy()
    positions[1, 1] = np.nan
    with pytest.raises(InvalidGeometryError):
        build_quiver(positions, DIRECTIONS, surface=surface)


def test_broadcast_helpers() -> None:
    assert broadcast_colors((0.5, 0.5, 0.5), 4).shape == (4, 3)
    assert broadcast_colors([[0.1, 0.2, 0.3]], 2).tolist() == [[0.1, 0.2, 0.3], [0.1, 0.2, 0.3]]
    np.testing.assert_array_equal(broadcast_values(0.3, 3, "x"), [0.3, 0.3, 0.3])
    np.testing.assert_array_equal(broadcast_values([0.1, 0.2], 2, "x"), [0.1, 0.2])


def test_ragged_directions(surface) -> None:
    with pytest.raises(InvalidArgumentShapeError):
        build_quiver(POSITIONS, [[0, 0, 1], [1, 1], [0, 1, 0]], surface=surface)


@pytest.mark.parametrize("stem_ratios", [[0.5, [0.6, 0.7], 0.5], "half"])
def test_non_numeric_stem_ratios(stem_ratios, surface) -> None:
    with pytest.raises(InvalidArgumentShapeError):
        build_quiver(POSITIONS, DIRECTIONS, stem_ratios=stem_ratios, surface=surface)
    assert len(surface) == 0


def test_options_are_keyword_only(surface) -> None:
    with pytest.raises(TypeError):
        build_quiver(POSITIONS, DIRECTIONS, "r", 0.75, 0.025, None, surface)
