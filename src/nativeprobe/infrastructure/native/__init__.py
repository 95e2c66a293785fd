"""Concrete native-library capabilities shipped with nativeprobe."""

from nativeprobe.infrastructure.native.library import NativeLibrary, SharedLibraryCapability
from nativeprobe.infrastructure.native.sqlite import SqliteNative, SqliteNativeDB

__all__ = ["NativeLibrary", "SharedLibraryCapability", "SqliteNative", "SqliteNativeDB"]
