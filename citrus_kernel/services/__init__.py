"""Services for the citrus kernel (write side)."""

from citrus_kernel.services.record_writer import RecordWriter

__all__ = [
    "RecordWriter",
]
