"""Allocate small integer ids for string keys, with a cool-off before ids are reused."""

__version__ = "0.1.0"
__all__ = ["bitmap", "hashmap", "id_allocator"]