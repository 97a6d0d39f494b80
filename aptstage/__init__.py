"""aptstage: stage Debian packages into an application tree without root.

- Private apt root (sources, keys, pins) per cache directory
- .deb URLs fetched only when the remote copy is not older than the cache
- Repository packages downloaded by apt-get in one batch
- Everything unpacked with dpkg -x into the install dir
"""

__all__ = []
