"""
errors.py - Fatal error types for a region build run.

Per-record problems are not errors; they are reported as skipped
RecordOutcome values by the aggregator.
"""


class RegionBuildError(Exception):
    """Base class for errors that abort a build run."""


class DownloadError(RegionBuildError):
    """An archive could not be fetched (transport failure or non-2xx status)."""


class ExtractError(RegionBuildError):
    """An archive could not be unpacked, or the shapefile inside is unusable."""


class StorageError(RegionBuildError):
    """The bounds database or search index could not be written."""
