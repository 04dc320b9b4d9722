"""Tests for data source contracts."""

import pytest


def test_points_model_implements_data_source():
    """Test PointsModel satisfies the PointsDataSource ABC."""
    from tripboard.models import FilterModel, InMemoryPointsApi, PointsModel
    from tripboard.protocols import FilterSource, PointsDataSource

    from conftest import SyncRunner

    assert isinstance(PointsModel(InMemoryPointsApi(), runner=SyncRunner()), PointsDataSource)
    assert isinstance(FilterModel(), FilterSource)


def test_incomplete_data_source_cannot_be_built():
    """Test abstract methods are enforced."""
    from tripboard.protocols import PointsDataSource

    class PointsOnly(PointsDataSource):
        @property
        def points(self):
            return []

    with pytest.raises(TypeError):
        PointsOnly()
