"""
Collaborator contracts.

ABC-based data source interfaces so presenters fail loud on incomplete
implementations instead of relying on duck typing.
"""

from .data_source import (
    PointsDataSource,
    FilterSource,
    PointsApi,
    Observer,
    SuccessCallback,
    ErrorCallback,
)

__all__ = [
    "PointsDataSource",
    "FilterSource",
    "PointsApi",
    "Observer",
    "SuccessCallback",
    "ErrorCallback",
]
