"""RBI Registry - resident classification and statistics for barangay registries."""

__version__ = "0.1.0"
