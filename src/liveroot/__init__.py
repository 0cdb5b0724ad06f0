"""liveroot — layered root filesystem assembly for live system images.

Mounts the read-only squashfs layers of a live system and unions them
with one writable branch through the kernel's union filesystem.
"""

from liveroot.version import __version__

__all__: list[str] = ["__version__"]
