"""Draft fields entered by the user. Plain text, no content validation."""

from dataclasses import asdict, dataclass, fields as dataclass_fields, replace

JOB_TYPES = [
    "Logistics",
    "Operations",
    "Sales",
    "Customer Service",
    "Engineering",
    "Healthcare",
    "Marketing",
    "Management",
]
TEMPLATES = ["Modern", "Corporate", "Creative"]
DEFAULT_TEMPLATE = "Modern"


@dataclass(frozen=True)
class DraftFields:
    contact_info: str = ""
    job_title: str = ""
    job_type: str = ""
    job_description: str = ""
    summary: str = ""
    skills: str = ""
    experience: str = ""
    template: str = DEFAULT_TEMPLATE

    @classmethod
    def field_names(cls) -> list[str]:
        return [f.name for f in dataclass_fields(cls)]

    @classmethod
    def from_dict(cls, data: dict) -> "DraftFields":
        """Build from a dict, ignoring unknown keys. None becomes empty string."""
        known = set(cls.field_names())
        values = {k: ("" if v is None else str(v)) for k, v in (data or {}).items() if k in known}
        return cls(**values)

    def with_updates(self, updates: dict) -> "DraftFields":
        known = set(self.field_names())
        values = {k: ("" if v is None else str(v)) for k, v in (updates or {}).items() if k in known}
        return replace(self, **values)

    def to_dict(self) -> dict:
        return asdict(self)
