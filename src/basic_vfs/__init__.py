"""basic-vfs - in-memory hierarchical namespace of files, folders and symbolic links."""

__version__ = "0.1.0"
