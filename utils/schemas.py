"""
Pydantic schemas shared by connectors, the registry and the HTTP layer.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic_core import to_jsonable_python

NOT_AUTHORIZED_MESSAGE = "Not Authorized"
NOT_AUTHORIZED_CODE = 401


# ═══════════════════════════════════════════════════════════════════════════════
# Connector options
# ═══════════════════════════════════════════════════════════════════════════════


class ConnectorOptions(BaseModel):
    """
    Option bag held by every connector.

    The two well-known options are typed fields; anything else a connector
    needs is kept as an extra key.  Known fields answer to both their
    camelCase alias (``useOAuth``) and their field name (``use_oauth``).
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    use_oauth: bool = Field(default=True, alias="useOAuth")
    extra_required_fields: List[str] = Field(
        default_factory=list, alias="extraRequiredFields"
    )

    @classmethod
    def _field_for(cls, key: str) -> Optional[str]:
        for name, field in cls.model_fields.items():
            if key == name or key == field.alias:
                return name
        return None

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "ConnectorOptions":
        """
        Defaults for every well-known option, overlaid with *values*.

        Caller values are stored exactly as given, the same way ``set`` does.
        """
        options = cls()
        for key, value in values.items():
            options.set(key, value)
        return options

    def get(self, key: str, default: Any = None) -> Any:
        """Return the option stored under *key*, or *default*."""
        name = self._field_for(key)
        if name is not None:
            return getattr(self, name)
        return (self.__pydantic_extra__ or {}).get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Insert or overwrite an option.  Values are not validated."""
        name = self._field_for(key)
        if name is not None:
            # stored as given, no validation
            self.__dict__[name] = value
            return
        self.__pydantic_extra__[key] = value

    def as_dict(self) -> Dict[str, Any]:
        """Plain mapping keyed by the public (camelCase) option names."""
        return self.model_dump(by_alias=True, warnings=False)

    def as_json_dict(self) -> Dict[str, Any]:
        """Like ``as_dict`` but JSON-safe; unknown value types are rendered with repr."""
        return to_jsonable_python(self.as_dict(), fallback=repr)


# ═══════════════════════════════════════════════════════════════════════════════
# Completion results
# ═══════════════════════════════════════════════════════════════════════════════


class ConnectorError(BaseModel):
    message: str
    code: Optional[int] = None

    @classmethod
    def unauthorized(cls) -> "ConnectorError":
        return cls(message=NOT_AUTHORIZED_MESSAGE, code=NOT_AUTHORIZED_CODE)


class ConnectorResult(BaseModel):
    """
    Outcome of an asynchronous connector operation.

    Either ``error`` is set (failure) or it is ``None`` and ``value`` holds
    the success payload, which may itself be ``None`` ("nothing to report").
    """

    value: Any = None
    error: Optional[ConnectorError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def is_unauthorized(self) -> bool:
        return self.error is not None and self.error.code == NOT_AUTHORIZED_CODE

    @classmethod
    def success(cls, value: Any = None) -> "ConnectorResult":
        return cls(value=value)

    @classmethod
    def failure(cls, message: str, code: Optional[int] = None) -> "ConnectorResult":
        return cls(error=ConnectorError(message=message, code=code))

    @classmethod
    def unauthorized(cls) -> "ConnectorResult":
        return cls(error=ConnectorError.unauthorized())


# ═══════════════════════════════════════════════════════════════════════════════
# Serialized connector
# ═══════════════════════════════════════════════════════════════════════════════


class ConnectorSnapshot(BaseModel):
    """Wire shape of ``ConnectorBase.to_json()``."""

    id: Optional[Union[str, int]] = None
    label: Optional[str] = None
    steps: List[Any] = Field(default_factory=list)
    options: Dict[str, Any] = Field(default_factory=dict)
    path: Optional[str] = None
