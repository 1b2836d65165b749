"""Credential DTO

凭证列表接口只返回元数据（id/name/type），不包含密钥
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from flowcanvas.domain.entities.credential import Credential


class CredentialDTO(BaseModel):
    id: str
    name: str
    type: str = Field(..., description="凭证类型（telegram / openai / gemini ...）")
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(extra="ignore")

    def to_entity(self) -> Credential:
        return Credential(id=self.id, name=self.name, type=self.type)

    @classmethod
    def from_entity(cls, credential: Credential) -> "CredentialDTO":
        return cls(id=credential.id, name=credential.name, type=credential.type)
