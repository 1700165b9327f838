"""Pool lifecycle and property management on top of zpool(8)."""

__version__ = "0.1.0"
