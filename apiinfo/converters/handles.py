"""
Editor object handles carried as MessagePack extension types.
"""

from dataclasses import dataclass

# Extension codes Neovim assigns to its remote object types
EXT_TYPES = {
    0: "Buffer",
    1: "Window",
    2: "Tabpage",
}

EXT_CODES = {kind: code for code, kind in EXT_TYPES.items()}


@dataclass(frozen=True)
class RemoteHandle:
    """A Buffer, Window, or Tabpage reference such as ``Buffer(1)``."""
    kind: str  # "Buffer", "Window" or "Tabpage"
    handle: int

    def __post_init__(self):
        if self.kind not in EXT_CODES:
            raise ValueError(f"Unknown handle kind: {self.kind}")
        if isinstance(self.handle, bool) or not isinstance(self.handle, int):
            raise ValueError(f"Handle must be an integer, got {self.handle!r}")

    @property
    def ext_code(self) -> int:
        return EXT_CODES[self.kind]

    def __str__(self) -> str:
        return f"{self.kind}({self.handle})"
