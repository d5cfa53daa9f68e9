"""Static description of the word providers and their priority."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional

from .utils import has_credential

if TYPE_CHECKING:
    from .providers import ProviderInvoker


@dataclass(frozen=True)
class ProviderDescriptor:
    """One registered provider. Lower ``priority`` is tried first."""

    name: str
    priority: int
    invoker: "ProviderInvoker"
    enabled: bool = True
    credential: Optional[str] = None

    @property
    def has_key(self) -> bool:
        return has_credential(self.credential)

    def is_available(self) -> bool:
        return self.enabled and self.has_key


class ProviderRegistry:
    """Providers registered once at startup, read-only afterwards."""

    def __init__(self, descriptors: Optional[List[ProviderDescriptor]] = None):
        self._descriptors: List[ProviderDescriptor] = []
        for descriptor in descriptors or []:
            self.register(descriptor)

    def register(self, descriptor: ProviderDescriptor) -> None:
        if any(d.name == descriptor.name for d in self._descriptors):
            raise ValueError(f"Provider {descriptor.name!r} is already registered")
        self._descriptors.append(descriptor)

    def list_by_priority(self) -> List[ProviderDescriptor]:
        # sorted() is stable, so equal ranks keep registration order
        return sorted(self._descriptors, key=lambda d: d.priority)

    def first_available(self) -> Optional[ProviderDescriptor]:
        """Highest-priority available provider, or None to signal the local fallback."""
        for descriptor in self.list_by_priority():
            if descriptor.is_available():
                return descriptor
        return None

    def status(self) -> Dict[str, Dict[str, object]]:
        return {
            d.name: {
                "priority": d.priority,
                "enabled": d.enabled,
                "has_key": d.has_key,
                "available": d.is_available(),
            }
            for d in self.list_by_priority()
        }

    def __len__(self) -> int:
        return len(self._descriptors)
