"""Tests for chunking strategies."""
import logging
import pytest

from kalturapy.core.upload.strategies.chunking import (
    FixedSizeChunkingStrategy,
    resolve_chunk_size,
    MIN_CHUNK_SIZE,
    DEFAULT_CHUNK_SIZE
)


class TestResolveChunkSize:
    """Test suite for resolve_chunk_size."""

    def test_default_when_unset(self):
        """Test None selects the default."""
        assert resolve_chunk_size(None) == DEFAULT_CHUNK_SIZE

    def test_default_when_zero(self):
        """Test zero selects the default."""
        assert resolve_chunk_size(0) == DEFAULT_CHUNK_SIZE

    def test_default_when_not_finite(self):
        """Test NaN and infinity select the default."""
        assert resolve_chunk_size(float('nan')) == DEFAULT_CHUNK_SIZE
        assert resolve_chunk_size(float('inf')) == DEFAULT_CHUNK_SIZE

    def test_requested_size_used(self):
        """Test valid size is used as-is."""
        assert resolve_chunk_size(2_000_000) == 2_000_000

    def test_minimum_enforced(self, caplog):
        """Test small sizes are raised to the minimum with a warning."""
        with caplog.at_level(logging.WARNING, logger='kalturapy.upload.chunking'):
            size = resolve_chunk_size(50_000)

        assert size == MIN_CHUNK_SIZE == 100_000
        assert 'minimal value' in caplog.text

    def test_minimum_itself_accepted(self):
        """Test boundary value."""
        assert resolve_chunk_size(MIN_CHUNK_SIZE) == MIN_CHUNK_SIZE


class TestFixedSizeChunkingStrategy:
    """Test suite for FixedSizeChunkingStrategy."""

    @pytest.fixture
    def strategy(self):
        """Create strategy with 5MB chunks."""
        return FixedSizeChunkingStrategy(5_000_000)

    def test_total_chunks(self, strategy):
        """Test chunk count rounds up."""
        assert strategy.total_chunks(12_000_000) == 3
        assert strategy.total_chunks(10_000_000) == 2

    def test_empty_file_is_one_chunk(self, strategy):
        """Test empty file."""
        chunks = strategy.calculate_chunks(0)

        assert len(chunks) == 1
        assert chunks[0].size == 0
        assert chunks[0].final

    def test_chunk_boundaries(self, strategy):
        """Test chunk offsets and final flags."""
        chunks = strategy.calculate_chunks(12_000_000)

        assert [c.start for c in chunks] == [0, 5_000_000, 10_000_000]
        assert [c.end for c in chunks] == [5_000_000, 10_000_000, 12_000_000]
        assert [c.final for c in chunks] == [False, False, True]

    def test_exact_multiple(self, strategy):
        """Test last chunk of an exact multiple is final."""
        chunks = strategy.calculate_chunks(10_000_000)

        assert [c.final for c in chunks] == [False, True]
        assert chunks[-1].size == 5_000_000

    def test_chunks_cover_entire_file(self, strategy):
        """Test that chunks cover entire file."""
        size = 23_456_789
        chunks = strategy.calculate_chunks(size)

        assert sum(c.size for c in chunks) == size
        for i in range(len(chunks) - 1):
            assert chunks[i].end == chunks[i + 1].start

    def test_chunk_at_offset(self, strategy):
        """Test chunk computed from a resume offset."""
        chunk = strategy.chunk_at(7_000_000, 12_000_000)

        assert chunk.start == 7_000_000
        assert chunk.end == 12_000_000
        assert chunk.final

    def test_from_config(self):
        """Test construction from a requested size."""
        assert FixedSizeChunkingStrategy.from_config(50_000).chunk_size == MIN_CHUNK_SIZE

    def test_invalid_chunk_size(self):
        """Test non-positive chunk size."""
        with pytest.raises(ValueError):
            FixedSizeChunkingStrategy(0)
