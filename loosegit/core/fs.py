"""Filesystem access for loosegit."""

import os
from abc import ABC, abstractmethod
from typing import BinaryIO, List


class FileSystem(ABC):
    """
    Read access to the files of a repository.
    
    Paths are strings in the form produced by join().
    """
    
    @abstractmethod
    def stat(self, path: str) -> os.stat_result:
        """
        Stat a path.
        
        Raises:
            FileNotFoundError: If path does not exist
            OSError: For any other failure
        """
        pass
    
    @abstractmethod
    def open(self, path: str) -> BinaryIO:
        """Open a file for binary reading."""
        pass
    
    @abstractmethod
    def join(self, *parts: str) -> str:
        """Join path components."""
        pass
    
    @abstractmethod
    def listdir(self, path: str) -> List[str]:
        """List the entry names of a directory."""
        pass
    
    @abstractmethod
    def isdir(self, path: str) -> bool:
        """Return True if path is an existing directory."""
        pass


class OSFileSystem(FileSystem):
    """FileSystem backed by the local disk."""
    
    def stat(self, path: str) -> os.stat_result:
        return os.stat(path)
    
    def open(self, path: str) -> BinaryIO:
        return open(path, 'rb')
    
    def join(self, *parts: str) -> str:
        return os.path.join(*parts)
    
    def listdir(self, path: str) -> List[str]:
        return os.listdir(path)
    
    def isdir(self, path: str) -> bool:
        return os.path.isdir(path)
    
    def __repr__(self) -> str:
        return "OSFileSystem()"
