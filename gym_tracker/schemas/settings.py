"""User preference schemas."""

from pydantic import BaseModel, ConfigDict, Field

from gym_tracker.core.enums import E1RMFormula, WeightUnit


class UserSettingsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    default_weight_unit: WeightUnit = WeightUnit.KG
    default_rest_period: int = 60
    e1rm_formula: E1RMFormula = E1RMFormula.BRZYCKI


class UserSettingsUpdate(BaseModel):
    default_weight_unit: WeightUnit | None = None
    default_rest_period: int | None = Field(None, gt=0)
    e1rm_formula: E1RMFormula | None = None
