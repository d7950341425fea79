"""Tests for chunk()."""

import pytest

from ceremony_spine.core.errors import ValidationError
from ceremony_spine.execution.chunking import chunk


class TestChunk:
    def test_empty(self):
        assert chunk([], 10) == []

    def test_exact_multiple(self):
        assert chunk(list(range(20)), 10) == [list(range(10)), list(range(10, 20))]

    def test_remainder_in_last_batch(self):
        batches = chunk(list(range(25)), 10)
        assert [len(b) for b in batches] == [10, 10, 5]
        assert batches[2] == [20, 21, 22, 23, 24]

    def test_fewer_than_size(self):
        assert chunk(["a", "b"], 10) == [["a", "b"]]

    def test_concatenation_restores_input(self):
        items = [f"id-{i}" for i in range(37)]
        assert [x for b in chunk(items, 10) for x in b] == items

    def test_accepts_tuples(self):
        assert chunk((1, 2, 3), 2) == [[1, 2], [3]]

    @pytest.mark.parametrize("size", [0, -1])
    def test_rejects_non_positive_size(self, size):
        with pytest.raises(ValidationError, match="batch size") as exc_info:
            chunk([1], size)
        assert exc_info.value.field == "batch_size"
        assert exc_info.value.value == size
