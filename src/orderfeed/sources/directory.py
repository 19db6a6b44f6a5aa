"""Read-only attribution directory: which marketplace an order came from."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..orders.order_models import Attribution
from ..utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SourceEntry:
    id: int
    address: str
    name: str
    domain: Optional[str] = None
    title: Optional[str] = None
    icon: Optional[str] = None
    url: Optional[str] = None
    token_url: Optional[str] = None  # template with {contract} and {token_id}

    def to_attribution(self, contract: Optional[str] = None, token_id: Optional[str] = None) -> Attribution:
        url = self.url
        if self.token_url and contract and token_id:
            url = self.token_url.format(contract=contract, token_id=token_id)
        return Attribution(
            id=self.address,
            domain=self.domain,
            name=self.title or self.name,
            icon=self.icon,
            url=url,
        )


@dataclass
class SourceDirectory:
    """
    In-memory source lookup keyed by integer id.

    Built once at startup and passed to the projector. Lookups never touch
    the store.
    """
    entries: Dict[int, SourceEntry] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "SourceDirectory":
        """
        Build the directory from a loaded sources config.

        Args:
            config: Dict with a "sources" list (see config/sources.yaml)
        """
        entries = {}
        for source in config.get("sources", []):
            metadata = source.get("metadata") or {}
            entry = SourceEntry(
                id=int(source["id"]),
                address=source["address"].lower(),
                name=source["name"],
                domain=source.get("domain"),
                title=metadata.get("title"),
                icon=metadata.get("icon"),
                url=metadata.get("url"),
                token_url=metadata.get("token_url"),
            )
            if entry.id in entries:
                logger.warning(f"Duplicate source id {entry.id} in config, keeping the last one")
            entries[entry.id] = entry
        return cls(entries=entries)

    def resolve(
        self,
        source_id: Optional[int],
        contract: Optional[str] = None,
        token_id: Optional[str] = None,
    ) -> Attribution:
        """
        Look up a source, optionally qualified by token for per-token urls.

        Returns:
            Attribution for the source, or an all-empty Attribution when the
            id is missing or unknown
        """
        if source_id is None:
            return Attribution()
        entry = self.entries.get(int(source_id))
        if entry is None:
            return Attribution()
        return entry.to_attribution(contract, token_id)

    def list_sources(self) -> List[SourceEntry]:
        return sorted(self.entries.values(), key=lambda e: e.id)
