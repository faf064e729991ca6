from typing import Dict, Any, Optional
from dataclasses import dataclass


@dataclass
class VisitorRecord:
    """A persisted registration entry.

    Serialised with the original backing-file keys: `created_at` holds
    `registered_at`.
    """
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    registered_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data = {"name": self.name, "email": self.email}
        # Left out entirely when the visitor gave no phone
        if self.phone is not None:
            data["phone"] = self.phone
        data["id"] = self.id
        data["created_at"] = self.registered_at
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VisitorRecord":
        return cls(
            id=data["id"],
            name=data["name"],
            email=data["email"],
            phone=data.get("phone"),
            registered_at=data.get("created_at", ""),
        )
