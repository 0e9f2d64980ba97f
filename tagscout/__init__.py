"""tagscout - input enumeration and run orchestration for source tag indexing."""

__version__ = "0.3.0"
