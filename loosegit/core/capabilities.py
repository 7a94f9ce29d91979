"""Capability descriptions for loosegit."""

from typing import Dict, Iterator, List

SYMREF = 'symref'


class Capabilities:
    """
    Named capabilities, each with an ordered list of string values.
    
    The on-disk store uses a single one: symref, whose value
    HEAD:<ref-name> names the reference HEAD points to.
    """
    
    def __init__(self):
        self._values: Dict[str, List[str]] = {}
    
    def supports(self, name: str) -> bool:
        """Return True if the capability is present."""
        return name in self._values
    
    def get(self, name: str) -> List[str]:
        """
        Get the values of a capability.
        
        Returns:
            A copy of the ordered values, empty if the capability is absent
        """
        return list(self._values.get(name, []))
    
    def set(self, name: str, *values: str) -> None:
        """Replace the values of a capability."""
        self._values[name] = list(values)
    
    def add(self, name: str, *values: str) -> None:
        """Append values to a capability, creating it if needed."""
        self._values.setdefault(name, []).extend(values)
    
    def __contains__(self, name: str) -> bool:
        return self.supports(name)
    
    def __iter__(self) -> Iterator[str]:
        return iter(self._values)
    
    def __len__(self) -> int:
        return len(self._values)
    
    def __repr__(self) -> str:
        return f"Capabilities({self._values!r})"
