"""Test factories for generating summary data."""

from polyfactory import Use
from polyfactory.factories import DataclassFactory

from testsum.models.summary import Failure, Summary


class FailureFactory(DataclassFactory[Failure]):
    """Factory for Failure."""

    __model__ = Failure


class SummaryFactory(DataclassFactory[Summary]):
    """Factory for Summary without failures or skips."""

    __model__ = Summary

    skipped = 0
    failures = Use(tuple)
    elapsed = 0.0
