"""Request bodies accepted by the HTTP API."""

from pydantic import BaseModel

from app.registry.models import DocumentStatus, Selection


class CreateDocumentRequest(BaseModel):
    title: str
    type: str
    urls: list[str]


class SelectionPayload(BaseModel):
    id: int | float
    color: str
    points: list[int | float]
    text: str
    type: str

    def to_selection(self) -> Selection:
        return Selection(
            id=self.id,
            color=self.color,
            points=list(self.points),
            text=self.text,
            type=self.type,
        )


class ReplaceSelectionsRequest(BaseModel):
    selections: list[SelectionPayload]


class StatusUpdateRequest(BaseModel):
    status: DocumentStatus
