"""
Referral Entity - A candidate referred by an employee for an opening.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional


class ReferralStatus(Enum):
    """Triage status of a referral."""

    PENDING = "Pending"
    REVIEWED = "Reviewed"
    HIRED = "Hired"
    REJECTED = "Rejected"

    @classmethod
    def parse(cls, value: "ReferralStatus | str") -> "ReferralStatus":
        """Accept an enum member or its wire value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown referral status: {value!r}") from None


@dataclass(frozen=True)
class ReferrerRef:
    """Reference to the user who submitted a referral."""

    id: str
    name: str = ""
    email: str = ""

    @classmethod
    def from_wire(cls, value: Any) -> Optional["ReferrerRef"]:
        """The API sends either a bare user id or a populated user object."""
        if not value:
            return None
        if isinstance(value, dict):
            return cls(
                id=str(value.get("_id") or value.get("id") or ""),
                name=value.get("name", ""),
                email=value.get("email", ""),
            )
        return cls(id=str(value))


@dataclass(frozen=True)
class Referral:
    """
    Referral entity representing one candidate record.

    Records are immutable; a status change produces a new instance so that
    collections can be swapped wholesale.

    Attributes:
        id: Server-assigned identifier (``_id`` or ``id`` on the wire)
        name: Candidate full name
        email: Candidate email
        phone: Candidate phone
        job_title: Position the candidate is referred for
        status: Triage status
        experience: Years of experience label ("Fresher", "1", ..., "4+")
        resume_url: Link to the uploaded resume
        referred_by: Submitting user
    """

    id: str
    name: str
    email: str
    job_title: str
    status: ReferralStatus = ReferralStatus.PENDING
    phone: str = ""
    experience: Optional[str] = None
    resume_url: str = ""
    referred_by: Optional[ReferrerRef] = None

    # Wire names accepted by the search filter, mapped to attributes
    SEARCHABLE_FIELDS = {
        "name": "name",
        "email": "email",
        "phone": "phone",
        "jobTitle": "job_title",
        "status": "status",
    }

    def __post_init__(self) -> None:
        """Validate and normalize referral data."""
        if not self.id:
            raise ValueError("id is required")

        if isinstance(self.status, str):
            object.__setattr__(self, "status", ReferralStatus.parse(self.status))

    def matches_id(self, referral_id: Any) -> bool:
        """Check identity; ids may arrive as str or int."""
        return self.id == str(referral_id)

    def field_text(self, category: str) -> Optional[str]:
        """
        Get the string value of a searchable field.

        Returns:
            The field text, or None when the field is unknown or not textual.
        """
        attr = self.SEARCHABLE_FIELDS.get(category, category)
        value = getattr(self, attr, None)
        if isinstance(value, ReferralStatus):
            return value.value
        return value if isinstance(value, str) else None

    def with_status(self, status: ReferralStatus) -> "Referral":
        """Create a new referral with an updated status."""
        return replace(self, status=status)

    def to_dict(self) -> dict:
        """Convert to the API's JSON shape."""
        data = {
            "_id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "jobTitle": self.job_title,
            "status": self.status.value,
            "resume": self.resume_url,
        }
        if self.experience is not None:
            data["experience"] = self.experience
        if self.referred_by:
            data["referredBy"] = {
                "_id": self.referred_by.id,
                "name": self.referred_by.name,
                "email": self.referred_by.email,
            }
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Referral":
        """
        Create Referral from an API record.

        Raises:
            ValueError: If the identifier is missing or the status is unknown.
        """
        referral_id = data.get("_id") or data.get("id")
        experience = data.get("experience")
        return cls(
            id=str(referral_id) if referral_id is not None else "",
            name=data.get("name", ""),
            email=data.get("email", ""),
            phone=data.get("phone") or "",
            job_title=data.get("jobTitle", ""),
            status=ReferralStatus.parse(data.get("status") or ReferralStatus.PENDING.value),
            experience=str(experience) if experience is not None else None,
            resume_url=data.get("resume") or data.get("resumeUrl") or "",
            referred_by=ReferrerRef.from_wire(data.get("referredBy")),
        )
