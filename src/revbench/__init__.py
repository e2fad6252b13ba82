"""revbench: compare benchmark timings across revisions of a binary."""

__version__ = "0.1.0"
