import re
from typing import NamedTuple


class VersionInfo(NamedTuple):
    major: int
    minor: int
    micro: int
    releaselevel: str


class Version:
    """A dotted WebLogic release, e.g. ``12.2.1.2``."""

    _version: str

    info: VersionInfo

    def __init__(self, version: str, version_info: VersionInfo = None) -> None:
        self._version = version
        if version_info is None:
            version_info = Version.from_str(self._version).info
        self.info = version_info

    def __str__(self) -> str:
        return self._version

    @classmethod
    def from_str(cls, version: str) -> "Version":
        """Parse a version string.

        Raises:
            ValueError: if `version` is not of the form ``major.minor.micro[...]``.
        """
        _match = re.fullmatch(r"(\d+)\.(\d+)\.(\d+)((?:\.\d+)*)", version or "")
        if _match is None:
            raise ValueError(f"'{version}' is not a valid version")
        _temp = _match.groups()
        _version_info = VersionInfo(
            int(_temp[0]), int(_temp[1]), int(_temp[2]), _temp[3] or ""
        )
        return Version(version, _version_info)
