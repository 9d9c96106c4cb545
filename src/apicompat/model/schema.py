from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from .errors import DescriptionErrorCode, build_description_error


class ApiVersion(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    major: int = Field(ge=0)
    minor: int = Field(ge=0)


class MethodSignature(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    param_types: tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("paramTypes", "parameterTypes", "param_types"),
    )
    return_type: str | None = Field(
        default=None,
        validation_alias=AliasChoices("returnType", "return_type"),
    )


class TypeEntry(BaseModel):
    """One record of the type registry.

    Only the surface that clients can observe is modeled: methods, events,
    supertype identity, type parameters and per-type metadata defaults. Other
    fields of an exported type (documentation, state schema, ...) are ignored.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    supertype: str | None = None
    methods: dict[str, MethodSignature] = Field(default_factory=dict)
    events: tuple[str, ...] = ()
    type_params: tuple[str, ...] | None = Field(
        default=None,
        validation_alias=AliasChoices("typeParams", "parameterTypes", "type_params"),
    )
    defaults: dict[str, Any] | None = Field(
        default=None,
        validation_alias=AliasChoices("defaults", "metadataDefaults"),
    )


class RawDescription(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    elements: dict[str, Any] = Field(
        validation_alias=AliasChoices("elements", "phetioElements"),
    )
    types: dict[str, TypeEntry] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("types", "phetioTypes"),
    )
    version: ApiVersion | None = None
    app_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("appId", "sim", "app_id"),
    )

    @property
    def is_legacy(self) -> bool:
        return self.version is None


def validate_raw_description(payload: object) -> RawDescription:
    if isinstance(payload, RawDescription):
        return payload
    if not isinstance(payload, Mapping):
        raise build_description_error(
            DescriptionErrorCode.E_DESC_NOT_MAPPING,
            f"description must be a mapping, got {type(payload).__name__}",
        )
    try:
        return RawDescription.model_validate(dict(payload))
    except ValidationError as exc:
        fields = tuple(
            sorted({".".join(str(part) for part in error["loc"]) for error in exc.errors()})
        )
        raise build_description_error(
            DescriptionErrorCode.E_DESC_SCHEMA_INVALID,
            f"description does not match the expected schema ({exc.error_count()} errors)",
            witness=fields,
        ) from exc
