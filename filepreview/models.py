from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, HttpUrl

OutputFormat = Literal["gif", "jpg", "png"]


class PreviewOptionsModel(BaseModel):
    width: Optional[int] = Field(None, gt=0)
    height: Optional[int] = Field(None, gt=0)
    force_aspect: bool = False
    quality: Optional[int] = Field(None, ge=1, le=100)
    background: Optional[str] = None
    colorspace: Optional[str] = None
    density: Optional[int] = Field(None, gt=0)
    autorotate: bool = False
    trim: bool = Field(False, description="Crop the preview to its non-border content")
    pagerange: Optional[str] = Field(
        None,
        pattern=r"^\d+-\d+$",
        description="Document page range as 'start-end', 1-based and inclusive",
    )


class PreviewUrlRequest(BaseModel):
    url: HttpUrl = Field(..., description="Public URL of the file to preview")
    format: OutputFormat = "jpg"
    options: PreviewOptionsModel = Field(default_factory=PreviewOptionsModel)


class PreviewFile(BaseModel):
    name: str
    path: str
    size_bytes: int


class PreviewResponse(BaseModel):
    file_type: str
    previews: List[PreviewFile] = Field(default_factory=list)
