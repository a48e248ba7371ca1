from __future__ import annotations

from typing import Annotated, Any, Literal
from urllib.parse import urlsplit

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationError,
    field_serializer,
    field_validator,
)

Unit = Literal["g", "kg", "ml", "l", "unit", "cs", "cc", "pincee"]

AisleCategory = Literal[
    "fruits_legumes",
    "boucherie_poisson",
    "cremerie",
    "epicerie",
    "surgeles",
    "boulangerie",
    "boissons",
    "entretien",
    "autres",
]

Allergen = Literal[
    "gluten",
    "lactose",
    "oeuf",
    "arachide",
    "fruits_a_coque",
    "soja",
    "poisson",
    "crustaces",
    "sesame",
]

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ScrapedIngredient(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: NonEmptyStr
    quantity: float = Field(gt=0, allow_inf_nan=False)
    unit: Unit
    aisle: AisleCategory | None = None

    @field_serializer("quantity")
    def serialize_quantity(self, value: float) -> int | float:
        # 350.0 is emitted as 350
        return int(value) if value.is_integer() else value


class ScrapedStep(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    description: NonEmptyStr
    minutes: int | None = Field(default=None, gt=0)


class ScrapedRecipe(BaseModel):
    """The normalized recipe record. Construction fails unless every invariant holds."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: NonEmptyStr
    description: Annotated[str, StringConstraints(strip_whitespace=True)]
    vegetarian: bool
    max_prep_time: int = Field(ge=5, le=300)
    is_seasonal: bool
    batch_friendly: bool
    base_servings: int = Field(ge=1, le=20)
    allergens: list[Allergen]
    ingredients: list[ScrapedIngredient] = Field(min_length=2)
    steps: list[ScrapedStep] = Field(min_length=2)
    source_name: NonEmptyStr
    source_url: str
    source_license: NonEmptyStr
    source_attribution: NonEmptyStr

    @field_validator("source_url")
    @classmethod
    def validate_source_url(cls, v: str) -> str:
        parts = urlsplit(v)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError("source_url must be an absolute http(s) URL")
        return v

    def to_json_dict(self) -> dict[str, Any]:
        """JSON-ready dict; absent optional fields (aisle, minutes) are omitted."""
        return self.model_dump(mode="json", exclude_none=True)


class FieldViolation(BaseModel):
    field: str
    message: str


def validate_recipe(data: dict[str, Any]) -> ScrapedRecipe | list[FieldViolation]:
    """Build a :class:`ScrapedRecipe` or list every invariant it breaks."""
    try:
        return ScrapedRecipe.model_validate(data)
    except ValidationError as exc:
        return [
            FieldViolation(
                field=".".join(str(part) for part in err["loc"]) or "<root>",
                message=err["msg"],
            )
            for err in exc.errors()
        ]
