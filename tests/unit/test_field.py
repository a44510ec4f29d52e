"""
Unit tests for MineField and FieldConfig.

Tests construction from grids and dimensions, random population,
adjacency counting and bounds checking.
"""
import pytest
import numpy as np
from minefield import (
    BEGINNER,
    EXPERT,
    INTERMEDIATE,
    FieldConfig,
    InvalidFieldError,
    MineField,
    OutOfRangeError,
)


# ============================================================================
# Field Configuration Tests
# ============================================================================

class TestFieldConfig:
    """Test field configuration validation."""

    def test_default_config(self) -> None:
        """Default configuration is 9x9 with 10 mines."""
        config = FieldConfig()
        assert (config.rows, config.cols, config.num_mines) == (9, 9, 10)

    def test_zero_rows_raises_error(self) -> None:
        """Zero rows should raise InvalidFieldError."""
        with pytest.raises(InvalidFieldError, match="dimensions must be positive"):
            FieldConfig(0, 9, 1)

    def test_zero_cols_raises_error(self) -> None:
        """Zero columns should raise InvalidFieldError."""
        with pytest.raises(InvalidFieldError, match="dimensions must be positive"):
            FieldConfig(9, 0, 1)

    def test_negative_mines_raises_error(self) -> None:
        """Negative mine count should raise InvalidFieldError."""
        with pytest.raises(InvalidFieldError, match="cannot be negative"):
            FieldConfig(9, 9, -1)

    def test_third_of_squares_is_too_many(self) -> None:
        """Mine count must stay strictly below a third of the squares."""
        with pytest.raises(InvalidFieldError, match="Too many mines"):
            FieldConfig(3, 3, 3)

    def test_just_below_a_third_is_valid(self) -> None:
        """Largest count below the cap should be accepted."""
        assert FieldConfig(3, 3, 2).num_mines == 2

    def test_errors_are_value_errors(self) -> None:
        """Configuration errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            FieldConfig(3, 3, 5)

    @pytest.mark.parametrize("preset", [BEGINNER, INTERMEDIATE, EXPERT])
    def test_presets_respect_cap(self, preset: FieldConfig) -> None:
        """Preset levels satisfy the density cap."""
        assert 3 * preset.num_mines < preset.rows * preset.cols


# ============================================================================
# Construction Tests
# ============================================================================

class TestFromGrid:
    """Test fields built from explicit mine grids."""

    def test_mine_count_matches_grid(self, small_field: MineField) -> None:
        """Mine count is the number of true cells."""
        assert small_field.mine_count == 5

    def test_has_mine_matches_grid(self) -> None:
        """has_mine agrees with every input cell."""
        grid = [[True, False, False], [False, False, True]]
        field = MineField.from_grid(grid)
        for row in range(2):
            for col in range(3):
                assert field.has_mine(row, col) is grid[row][col]

    def test_dimensions(self) -> None:
        """Rows and columns follow the grid shape."""
        field = MineField.from_grid([[False] * 5 for _ in range(2)])
        assert field.rows == 2
        assert field.cols == 5

    def test_grid_is_copied(self) -> None:
        """Later changes to the input do not reach the field."""
        grid = [[False, False], [False, False]]
        field = MineField.from_grid(grid)
        grid[0][0] = True
        assert field.has_mine(0, 0) is False

    def test_grid_field_is_not_nominal(self, small_field: MineField) -> None:
        """Grid fields hold exactly their mine count."""
        assert small_field.is_nominal is False
        assert small_field.mines_placed() == small_field.mine_count

    def test_empty_grid_raises_error(self) -> None:
        """Empty grids are rejected."""
        with pytest.raises(InvalidFieldError, match="at least one square"):
            MineField.from_grid([])
        with pytest.raises(InvalidFieldError, match="at least one square"):
            MineField.from_grid([[]])

    def test_ragged_grid_raises_error(self) -> None:
        """Non-rectangular grids are rejected."""
        with pytest.raises(InvalidFieldError, match="rectangular"):
            MineField.from_grid([[False, False], [False]])

    def test_nested_grid_raises_error(self) -> None:
        """Grids with more than two dimensions are rejected."""
        with pytest.raises(InvalidFieldError, match="two-dimensional"):
            MineField.from_grid([[[True], [False]], [[False], [False]]])


class TestNominalField:
    """Test fields built from dimensions."""

    def test_starts_without_mines(self, nominal_field: MineField) -> None:
        """A nominal field has no mines until populated."""
        assert nominal_field.mines_placed() == 0
        assert nominal_field.mine_count == 10
        assert nominal_field.is_nominal is True

    def test_from_config(self) -> None:
        """from_config copies the configured dimensions."""
        field = MineField.from_config(FieldConfig(4, 6, 3))
        assert (field.rows, field.cols, field.mine_count) == (4, 6, 3)

    @pytest.mark.parametrize("rows, cols", [(0, 4), (4, 0), (-1, 4)])
    def test_bad_dimensions_raise_error(self, rows: int, cols: int) -> None:
        """Dimensions must be positive."""
        with pytest.raises(InvalidFieldError):
            MineField(rows, cols, 0)

    def test_too_many_mines_raises_error(self) -> None:
        """Mine count must stay below a third of the squares."""
        with pytest.raises(InvalidFieldError):
            MineField(3, 3, 3)


# ============================================================================
# Populate Tests
# ============================================================================

class TestPopulate:
    """Test random mine placement."""

    def test_places_exact_mine_count(self, nominal_field: MineField) -> None:
        """Populate places exactly mine_count mines."""
        nominal_field.populate(4, 4)
        assert nominal_field.mines_placed() == nominal_field.mine_count
        assert nominal_field.is_nominal is False

    def test_safe_square_never_mined(self) -> None:
        """The excluded square never receives a mine."""
        for seed in range(200):
            field = MineField(4, 4, 5, rng=np.random.default_rng(seed))
            field.populate(1, 2)
            assert field.has_mine(1, 2) is False
            assert field.mines_placed() == 5

    def test_repopulate_keeps_settings(self, nominal_field: MineField) -> None:
        """Repeated populates never change dimensions or mine count."""
        for row, col in [(0, 0), (8, 8), (4, 2)]:
            nominal_field.reset_empty()
            nominal_field.populate(row, col)
            assert nominal_field.rows == 9
            assert nominal_field.cols == 9
            assert nominal_field.mine_count == 10
            assert nominal_field.mines_placed() == 10

    def test_same_seed_same_layout(self) -> None:
        """Seeded random sources give reproducible layouts."""
        first = MineField(9, 9, 10, rng=np.random.default_rng(7))
        second = MineField(9, 9, 10, rng=np.random.default_rng(7))
        first.populate(0, 0)
        second.populate(0, 0)
        assert np.array_equal(first.to_array(), second.to_array())

    def test_populate_clears_old_mines(self, small_field: MineField) -> None:
        """Populating a grid field replaces its layout."""
        small_field.populate(1, 0)
        assert small_field.has_mine(1, 0) is False
        assert small_field.mines_placed() == 5

    def test_populate_out_of_range_raises(self, nominal_field: MineField) -> None:
        """The safe square must be on the field."""
        with pytest.raises(OutOfRangeError):
            nominal_field.populate(9, 0)

    def test_dense_grid_cannot_populate(self) -> None:
        """A grid field above the density cap refuses to repopulate."""
        field = MineField.from_grid([[True, True], [False, False]])
        with pytest.raises(InvalidFieldError, match="Cannot randomly place"):
            field.populate(1, 1)


class TestResetEmpty:
    """Test clearing the field."""

    def test_removes_all_mines(self, small_field: MineField) -> None:
        """reset_empty leaves no mines on the grid."""
        small_field.reset_empty()
        assert small_field.mines_placed() == 0

    def test_keeps_mine_count(self, small_field: MineField) -> None:
        """reset_empty does not touch the mine count or dimensions."""
        small_field.reset_empty()
        assert small_field.mine_count == 5
        assert (small_field.rows, small_field.cols) == (4, 4)


# ============================================================================
# Adjacency Tests
# ============================================================================

class TestAdjacency:
    """Test adjacent mine counting."""

    def test_small_layout_counts(self, small_field: MineField) -> None:
        """Counts match a hand-checked layout."""
        expected = [
            [1, 1, 0, 0],
            [1, 3, 2, 1],
            [3, 3, 3, 2],
            [2, 2, 4, 1],
        ]
        for row in range(4):
            for col in range(4):
                assert small_field.adjacent_mine_count(row, col) == expected[row][col]

    def test_own_mine_not_counted(self) -> None:
        """A mine does not count itself."""
        field = MineField.from_grid([[True, False], [False, False]])
        assert field.adjacent_mine_count(0, 0) == 0
        assert field.adjacent_mine_count(1, 1) == 1

    def test_all_eight_neighbors_counted(self) -> None:
        """A square surrounded by mines counts 8."""
        grid = [[True] * 3 for _ in range(3)]
        grid[1][1] = False
        field = MineField.from_grid(grid)
        assert field.adjacent_mine_count(1, 1) == 8

    def test_empty_field_counts_zero(self, empty_field: MineField) -> None:
        """A mine-free field has zero counts everywhere."""
        assert not empty_field.adjacent_counts().any()

    def test_bulk_counts_match_single_counts(self, nominal_field: MineField) -> None:
        """adjacent_counts agrees with adjacent_mine_count on every square."""
        nominal_field.populate(0, 0)
        counts = nominal_field.adjacent_counts()
        assert counts.shape == (9, 9)
        for row in range(9):
            for col in range(9):
                assert counts[row, col] == nominal_field.adjacent_mine_count(row, col)
                assert 0 <= counts[row, col] <= 8

    def test_neighbors_at_corner(self, small_field: MineField) -> None:
        """Corner squares have three neighbors."""
        assert sorted(small_field.neighbors(0, 0)) == [(0, 1), (1, 0), (1, 1)]

    def test_neighbors_in_middle(self, small_field: MineField) -> None:
        """Inner squares have all eight neighbors."""
        assert len(small_field.neighbors(1, 1)) == 8


# ============================================================================
# Bounds Tests
# ============================================================================

class TestBounds:
    """Test range checking."""

    def test_in_range(self, small_field: MineField) -> None:
        """in_range is a plain 0-indexed bounds check."""
        assert small_field.in_range(0, 0) is True
        assert small_field.in_range(3, 3) is True
        assert small_field.in_range(-1, 0) is False
        assert small_field.in_range(0, 4) is False

    @pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (4, 0), (0, 4)])
    def test_queries_out_of_range_raise(
        self, small_field: MineField, row: int, col: int
    ) -> None:
        """Coordinate queries off the field raise OutOfRangeError."""
        with pytest.raises(OutOfRangeError, match="outside the 4x4 field"):
            small_field.has_mine(row, col)
        with pytest.raises(OutOfRangeError):
            small_field.adjacent_mine_count(row, col)

    def test_out_of_range_is_index_error(self, small_field: MineField) -> None:
        """OutOfRangeError can be caught as IndexError."""
        with pytest.raises(IndexError):
            small_field.has_mine(10, 10)
