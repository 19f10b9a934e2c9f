"""Base model configuration for all Pydantic models."""

from pydantic import BaseModel, ConfigDict


class HubviewBaseModel(BaseModel):
    """Base model with common configuration.

    Conventions:
    - Field names are lowercase snake_case
    - Enum fields hold their string values
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=True,
    )


class WireModel(BaseModel):
    """Base for models parsed from Kubernetes API documents.

    Unknown fields are ignored so newer CRD versions still parse.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )
