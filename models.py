#models.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

# Fixed column order of the exported sheet.
COLUMNS: Tuple[str, ...] = (
    "Form GUID",
    "Form Name",
    "Form Submission ID",
    "Time Submitted",
    "Contact Email Address",
    "Page converted on",
    "All Properties",
)

# HubSpot object type id of CRM contacts.
CONTACT_OBJECT_TYPE_ID = "0-1"


@dataclass(frozen=True, slots=True)
class Form:
    id: str
    name: str

    @classmethod
    def from_api(cls, obj: Mapping[str, Any]) -> "Form":
        return cls(id=str(obj["id"]), name=obj.get("name") or "")


@dataclass(frozen=True, slots=True)
class PropertyValue:
    name: str
    value: Optional[str]
    object_type_id: Optional[str] = None

    @classmethod
    def from_api(cls, obj: Mapping[str, Any]) -> "PropertyValue":
        return cls(
            name=obj.get("name") or "",
            value=obj.get("value"),
            object_type_id=obj.get("objectTypeId"),
        )


@dataclass(frozen=True, slots=True)
class Submission:
    conversion_id: str
    submitted_at: int  # epoch milliseconds
    page_url: str
    values: Tuple[PropertyValue, ...] = ()
    raw_values: List[Dict[str, Any]] = field(default_factory=list, compare=False)  # as received; serialized verbatim

    @classmethod
    def from_api(cls, obj: Mapping[str, Any]) -> "Submission":
        raw = list(obj.get("values") or [])
        return cls(
            conversion_id=obj.get("conversionId") or "",
            submitted_at=int(obj["submittedAt"]),
            page_url=obj.get("pageUrl") or "",
            values=tuple(PropertyValue.from_api(v) for v in raw),
            raw_values=raw,
        )


@dataclass(frozen=True, slots=True)
class OutputRow:
    form_id: str
    form_name: str
    submission_id: str
    submitted_at_iso: str
    contact_email: str
    page_url: str
    all_properties_json: str

    def as_cells(self) -> Tuple[str, ...]:
        """Cell values in COLUMNS order."""
        return (
            self.form_id,
            self.form_name,
            self.submission_id,
            self.submitted_at_iso,
            self.contact_email,
            self.page_url,
            self.all_properties_json,
        )
