from typing import (
    cast,
    Protocol,
)
from pathlib import Path


class ReadWrite(Protocol):
    def read(self, size: int = -1) -> bytes: ...
    def write(self, data: bytes) -> int: ...
    def close(self) -> None: ...


class Materializer(Protocol):
    """
    解压时需要的文件系统操作，每个成员只调用一次。
    """
    def create_directory(self, path: Path, parents: bool = True) -> None: ...
    def create_file(self, path: Path, contents: bytes | memoryview) -> None: ...
    def write_empty_file(self, path: Path) -> None: ...
