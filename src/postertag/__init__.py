"""postertag - embed movie poster art into MP4 and MKV files."""

__version__ = "0.1.0"
