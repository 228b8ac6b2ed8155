"""
Event Models
"""
from typing import Any, Dict, List, Mapping

from pydantic import BaseModel, Field

REQUIRED_FIELDS = ("title", "description", "location", "start", "end", "poc")


class EventCreate(BaseModel):
    """Fields submitted by the creation form"""
    id: str = ""
    title: str = ""
    description: str = ""
    location: str = ""
    start: str = ""
    end: str = ""
    poc: str = ""

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> "EventCreate":
        """Reads the first value of each known field; unknown fields are ignored"""
        values = {}
        for name in cls.model_fields:
            value = form.get(name)
            values[name] = value if isinstance(value, str) else ""
        return cls(**values)

    def missing_fields(self) -> List[str]:
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]


class Event(BaseModel):
    """Event record as stored and rendered"""
    id: str = ""
    title: str = ""
    description: str = ""
    location: str = ""
    start: str = ""
    end: str = ""
    poc: str = ""
    attendees: List[str] = Field(default_factory=list)

    @classmethod
    def from_document(cls, data: Mapping[str, Any]) -> "Event":
        return cls.model_validate({key: value for key, value in data.items() if key in cls.model_fields})

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump()
