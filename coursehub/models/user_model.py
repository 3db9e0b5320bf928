from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class EmailAddress(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email_address: str = ""


class ClerkUserData(BaseModel):
    """`data` block of a Clerk user.* event; unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    image_url: Optional[str] = None
    email_addresses: List[EmailAddress] = Field(default_factory=list)

    @property
    def email(self) -> str:
        return self.email_addresses[0].email_address if self.email_addresses else ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    def profile(self) -> Dict[str, Any]:
        return {
            "email": self.email,
            "name": self.full_name,
            "imageUrl": self.image_url or "",
        }


class ClerkEvent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str
    data: Dict[str, Any] = Field(default_factory=dict)
