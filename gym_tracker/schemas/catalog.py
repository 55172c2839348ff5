"""Machine catalog schemas (static reference data)."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from gym_tracker.core.enums import GripType, MuscleGroup, RoomLocation, WeightType


class Attachment(BaseModel):
    """Handle/bar clipped onto a machine, with the grips it allows."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    grips: tuple[GripType, ...] = Field(..., min_length=1)


class Machine(BaseModel):
    """Machine/equipment entry. Identity is `id`."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    picture: str | None = None
    location: RoomLocation
    muscles: tuple[MuscleGroup, ...] = Field(..., min_length=1)
    weight_type: WeightType = Field(..., validation_alias=AliasChoices("weight_type", "weightType"))
    attachments: tuple[Attachment, ...] = ()
    default_rest_period: int | None = Field(None, gt=0, validation_alias=AliasChoices("default_rest_period", "defaultRestPeriod"))
    weight_increment: float | None = Field(None, gt=0, validation_alias=AliasChoices("weight_increment", "weightIncrement"))
    min_weight: float | None = Field(None, ge=0, validation_alias=AliasChoices("min_weight", "minWeight"))
    max_weight: float | None = Field(None, ge=0, validation_alias=AliasChoices("max_weight", "maxWeight"))

    @field_validator("attachments")
    @classmethod
    def _unique_attachment_ids(cls, v: tuple[Attachment, ...]) -> tuple[Attachment, ...]:
        ids = [a.id for a in v]
        if len(ids) != len(set(ids)):
            raise ValueError("attachment ids must be unique within a machine")
        return v

    @model_validator(mode="after")
    def _weight_bounds(self) -> "Machine":
        if self.min_weight is not None and self.max_weight is not None and self.min_weight > self.max_weight:
            raise ValueError("minWeight must be <= maxWeight")
        return self

    def get_attachment(self, attachment_id: str) -> Attachment | None:
        return next((a for a in self.attachments if a.id == attachment_id), None)


class CatalogData(BaseModel):
    """Root of machines.json: `{"machines": [...]}`."""

    machines: list[Machine]

    @field_validator("machines")
    @classmethod
    def _unique_machine_ids(cls, v: list[Machine]) -> list[Machine]:
        seen: set[str] = set()
        for m in v:
            if m.id in seen:
                raise ValueError(f"duplicate machine id: {m.id}")
            seen.add(m.id)
        return v


class MachineDetail(Machine):
    """Machine plus how many distinct variants it offers."""

    variant_count: int
