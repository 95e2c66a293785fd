"""nativeprobe: confirm a native library loads and initializes on this host."""

__version__ = "0.1.0"
