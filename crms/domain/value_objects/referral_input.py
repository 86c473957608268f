"""
ReferralInput Value Object - What a user submits in the referral form.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class ReferralInput:
    """
    Immutable, validated referral submission.

    Attributes:
        name: Candidate name (required)
        email: Candidate email (required)
        job_title: Opening the candidate is referred for (required)
        phone: Candidate phone
        experience: Experience label from the form
        resume_url: Link to an online resume
        resume_file: Local resume file to upload
    """

    JOB_TITLES = (
        "Frontend Developer",
        "Backend Developer",
        "Fullstack Developer",
        "UI/UX Designer",
        "Product Manager",
        "QA Engineer",
    )
    EXPERIENCE_OPTIONS = ("Fresher", "1", "2", "3", "4+")
    RESUME_EXTENSIONS = {".pdf", ".doc", ".docx"}

    TEXT_FIELDS = ("name", "email", "job_title", "phone", "resume_url")

    name: str
    email: str
    job_title: str
    phone: str = ""
    experience: Optional[str] = None
    resume_url: str = ""
    resume_file: Optional[Path] = None

    def __post_init__(self) -> None:
        """Normalize raw form values, then validate before anything reaches the network."""
        for field_name in self.TEXT_FIELDS:
            value = getattr(self, field_name)
            object.__setattr__(self, field_name, "" if value is None else str(value))
        if self.experience is not None:
            object.__setattr__(self, "experience", str(self.experience) or None)
        if self.resume_file is not None and not isinstance(self.resume_file, Path):
            resume_file = str(self.resume_file).strip()
            object.__setattr__(self, "resume_file", Path(resume_file) if resume_file else None)

        if not self.name.strip() or not self.email.strip() or not self.job_title.strip():
            raise ValueError("Please fill in all required fields")
        if not EMAIL_PATTERN.match(self.email.strip()):
            raise ValueError("Please enter a valid email address")
        if self.resume_file is not None:
            if self.resume_file.suffix.lower() not in self.RESUME_EXTENSIONS:
                raise ValueError("Resume must be a PDF or Word document")

    def form_fields(self) -> dict[str, str]:
        """Text parts of the multipart submission."""
        fields = {
            "name": self.name.strip(),
            "email": self.email.strip(),
            "phone": self.phone.strip(),
            "jobTitle": self.job_title,
            "resume": self.resume_url,
        }
        if self.experience:
            fields["experience"] = self.experience
        return fields
