"""
App Models

Dataclass models for applications owned by a user.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class AppSummary:
    """Application as shown in listings."""

    name: str
    state: str = "unknown"
    subdomain: Optional[str] = None
    snapshot: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppSummary":
        """Build a summary from an API record."""
        snapshot = data.get("snapshot") or data.get("version")
        return cls(
            name=data.get("name", ""),
            state=data.get("state") or "unknown",
            subdomain=data.get("subdomain"),
            snapshot=str(snapshot) if snapshot is not None else None,
        )

    def __repr__(self) -> str:
        return f"AppSummary(name={self.name}, state={self.state})"
