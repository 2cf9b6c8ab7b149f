"""
Pydantic schemas for hearing list layouts and extracted case records.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

NOT_PROVIDED = "Not Provided"

# Output column order, shared with the CSV serializer
CSV_COLUMNS: list[str] = [
    "Court Name",
    "Court Date",
    "Claim Number",
    "Claimant",
    "Defendant",
    "Duration",
    "Hearing Type",
    "Hearing Channel",
    "Title",
]


class LayoutKind(str, Enum):
    """Known hearing list layouts."""

    CASE_REF = "case_ref"
    POSSESSION_SCHEDULE = "possession_schedule"
    COMBINED_CLAIM_HEADER = "combined_claim_header"
    SIMPLE_CLAIM = "simple_claim"
    UNRECOGNIZED = "unrecognized"


class CaseRecord(BaseModel):
    """One hearing entry extracted from a list.

    Every field is a string. Party and hearing metadata fall back to
    "Not Provided"; court, date and claim number fall back to "".
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    court_name: str = Field(default="", alias="Court Name")
    court_date: str = Field(default="", alias="Court Date")  # DD/MM/YYYY
    claim_number: str = Field(default="", alias="Claim Number")
    claimant: str = Field(default=NOT_PROVIDED, alias="Claimant")
    defendant: str = Field(default=NOT_PROVIDED, alias="Defendant")
    duration: str = Field(default=NOT_PROVIDED, alias="Duration")
    hearing_type: str = Field(default=NOT_PROVIDED, alias="Hearing Type")
    hearing_channel: str = Field(default=NOT_PROVIDED, alias="Hearing Channel")
    title: str = Field(default="", alias="Title")

    @field_validator("court_name", "court_date", "claim_number", "title", mode="before")
    @classmethod
    def blank_to_empty(cls, value: str | None) -> str:
        """Coerce missing identifying fields to an empty string."""
        return (value or "").strip()

    @field_validator(
        "claimant", "defendant", "duration", "hearing_type", "hearing_channel", mode="before"
    )
    @classmethod
    def blank_to_not_provided(cls, value: str | None) -> str:
        """Coerce missing party/hearing fields to the placeholder."""
        value = (value or "").strip()
        return value or NOT_PROVIDED

    def to_row(self) -> list[str]:
        """Field values in output column order."""
        data = self.model_dump(by_alias=True)
        return [data[column] for column in CSV_COLUMNS]


class CourtHeader(BaseModel):
    """Court name and raw date line scanned from a list's paragraphs."""

    name: str = ""
    raw_date: str = ""


class ExtractionResult(BaseModel):
    """Outcome of processing one hearing list document."""

    source: str
    title: str = ""
    layout: LayoutKind = LayoutKind.UNRECOGNIZED
    tables_found: int = 0
    records: list[CaseRecord] = Field(default_factory=list)
    skip_reason: str | None = None  # Why no records were attempted

    @property
    def is_empty(self) -> bool:
        """True when nothing was extracted (document goes to unprocessed)."""
        return not self.records
