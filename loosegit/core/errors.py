"""Exceptions raised by loosegit."""

from typing import Optional


class LooseGitError(Exception):
    """Base class for all loosegit errors."""


class NotFoundError(LooseGitError, LookupError):
    """A path, object or reference does not exist."""
    
    def __init__(self, message: str = "path not found"):
        super().__init__(message)


class ReferenceNotFoundError(NotFoundError):
    """A named reference is missing from the reference namespace."""
    
    def __init__(self, ref_name: str, message: Optional[str] = None):
        self.ref_name = ref_name
        super().__init__(message or f"reference {ref_name!r} not found")


class UnsupportedError(LooseGitError, NotImplementedError):
    """The store cannot perform the requested operation."""
    
    def __init__(self, message: str = "not implemented yet", hash=None):
        super().__init__(message)
        self.hash = hash


class DecodeError(LooseGitError, ValueError):
    """On-disk data could not be decoded."""


class PackedRefsError(DecodeError):
    """The packed-refs file is malformed."""


class HeadError(LooseGitError):
    """HEAD could not be resolved to a hash."""
    
    PREFIX = "cannot get HEAD reference:"
    
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"{self.PREFIX} {detail}")
