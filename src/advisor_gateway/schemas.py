"""Inbound request bodies.

Every field is optional at this layer so that missing fields reach the
handlers, which report them with the gateway's own error messages.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TranslateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: str | None = None
    target: str | None = None


class ChatRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: str | None = None
    history: Any = Field(default_factory=list)


class RemedyRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    disease_name: str | None = Field(default=None, alias="diseaseName")
    image_base64: str | None = Field(default=None, alias="imageBase64")
    lang: str | None = None

    def log_summary(self) -> dict[str, Any]:
        """Body as logged: the image is reduced to its length."""
        return {
            "diseaseName": self.disease_name,
            "imageBase64": f"<{len(self.image_base64)} chars>" if self.image_base64 else None,
            "lang": self.lang,
        }


class HealthResponse(BaseModel):
    status: str = "healthy"
    providers: dict[str, str]
