from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DocumentStatus(str, Enum):
    """Processing status. Any status may move to any other."""

    PENDING = "Pending"
    PROCESSED = "Processed"
    NEEDS_REVIEW = "Needs Review"


@dataclass(frozen=True)
class Selection:
    """A client-authored annotation: geometry, label and kind."""

    id: int | float
    color: str
    points: list[int | float]
    text: str
    type: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "color": self.color,
            "points": list(self.points),
            "text": self.text,
            "type": self.type,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Selection":
        return cls(
            id=data["id"],
            color=data["color"],
            points=list(data["points"]),
            text=data["text"],
            type=data["type"],
        )


@dataclass(frozen=True)
class DocumentSummary:
    """Projection of a document as stored in the index record.

    Never carries selections or the analysis result.
    """

    id: str
    title: str
    type: str
    status: DocumentStatus
    created_at: str
    urls: list[str]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "type": self.type,
            "status": self.status.value,
            "createdAt": self.created_at,
            "urls": list(self.urls),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DocumentSummary":
        return cls(
            id=data["id"],
            title=data["title"],
            type=data["type"],
            status=DocumentStatus(data["status"]),
            created_at=data["createdAt"],
            urls=list(data["urls"]),
        )


@dataclass
class Document:
    """Primary record for one document, keyed by id."""

    id: str
    title: str
    type: str
    status: DocumentStatus
    created_at: str
    urls: list[str]
    analysis_result: Any | None = None
    selections: list[Selection] | None = None

    def summary(self) -> DocumentSummary:
        return DocumentSummary(
            id=self.id,
            title=self.title,
            type=self.type,
            status=self.status,
            created_at=self.created_at,
            urls=list(self.urls),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys; unset optional fields are omitted."""
        data = self.summary().to_dict()
        if self.analysis_result is not None:
            data["analysisResult"] = self.analysis_result
        if self.selections is not None:
            data["selections"] = [s.to_dict() for s in self.selections]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Document":
        selections = data.get("selections")
        return cls(
            id=data["id"],
            title=data["title"],
            type=data["type"],
            status=DocumentStatus(data["status"]),
            created_at=data["createdAt"],
            urls=list(data["urls"]),
            analysis_result=data.get("analysisResult"),
            selections=(
                [Selection.from_dict(s) for s in selections]
                if selections is not None
                else None
            ),
        )


@dataclass
class ReconcileReport:
    """Outcome of comparing the index record against primary records.

    dropped: ids listed in the index with no primary record.
    refreshed: ids whose projection disagreed with the primary record.
    """

    dropped: list[str] = field(default_factory=list)
    refreshed: list[str] = field(default_factory=list)
    applied: bool = False

    @property
    def consistent(self) -> bool:
        return not self.dropped and not self.refreshed

    def to_dict(self) -> dict[str, Any]:
        return {
            "consistent": self.consistent,
            "applied": self.applied,
            "dropped": list(self.dropped),
            "refreshed": list(self.refreshed),
        }
