"""Pydantic DTOs for the remote tax record and country resources."""

from pydantic import BaseModel, ConfigDict, Field

from taxdesk.domain.entities import Country, TaxRecord


class TaxRecordPayload(BaseModel):
    """Wire shape of one tax record as returned by the records resource."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    name: str
    country: str
    created_at: str | None = Field(None, alias="createdAt")
    avatar: str | None = None

    def to_entity(self) -> TaxRecord:
        return TaxRecord(
            id=self.id,
            name=self.name,
            country=self.country,
            created_at=self.created_at,
            avatar=self.avatar,
        )


class CountryPayload(BaseModel):
    """Wire shape of one country as returned by the countries resource."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    code: str | None = None

    def to_entity(self) -> Country:
        return Country(id=self.id, name=self.name, code=self.code)


class TaxRecordUpdate(BaseModel):
    """Full-replace body for ``PUT records/{id}`` — the two mutable fields."""

    name: str
    country: str
