"""Schemas for the vendor migration endpoints.

The migration UI posts camelCase keys, so every field has a camelCase alias.
"""

from pydantic import BaseModel, ConfigDict, Field

from pfm_simulator.application.use_cases.migration import (
    MigrationConfig,
    MigrationEntities,
)


class MigrationEntitiesRequest(BaseModel):
    user: bool = False
    accounts: bool = False
    transactions: bool = False
    budgets: bool = False
    goals: bool = False
    alerts: bool = False
    tags: bool = False

    def to_entities(self) -> MigrationEntities:
        return MigrationEntities(**self.model_dump())


class MigrationConnectionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    api_key: str = Field(..., alias="apiKey", min_length=1)
    partner_domain: str = Field(..., alias="partnerDomain", min_length=1)
    pcid: str = Field(..., min_length=1)
    partner_id: str = Field(..., alias="partnerId", min_length=1)

    def to_config(self) -> MigrationConfig:
        return MigrationConfig(
            api_key=self.api_key,
            partner_domain=self.partner_domain,
            pcid=self.pcid,
            partner_id=self.partner_id,
        )


class MigrationStartRequest(MigrationConnectionRequest):
    entities: MigrationEntitiesRequest = Field(default_factory=MigrationEntitiesRequest)
