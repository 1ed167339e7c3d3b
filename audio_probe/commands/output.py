from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class FieldLine:
    label: str
    value: object
    unit: Optional[str] = None

    def render(self) -> str:
        if self.value is None:
            return f"  {self.label}: unknown"
        if self.unit:
            return f"  {self.label}: {self.value} {self.unit}"
        return f"  {self.label}: {self.value}"


def field_line(label: str, value: object, unit: Optional[str] = None) -> str:
    return FieldLine(label, value, unit).render()


def format_length(seconds: Optional[float]) -> str:
    if seconds is None:
        return "?:??"
    total = int(seconds)
    minutes, secs = divmod(total, 60)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"
