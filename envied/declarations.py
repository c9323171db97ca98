from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
)

from .errors import DeclarationError
from .options import ClassConfig, EnvClass, EnvField, FieldConfig

TYPE_NAMES: Dict[str, type] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
}


class _DeclarationModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class FieldDeclaration(_DeclarationModel):
    name: str
    type: str = "str"
    var_name: Optional[str] = Field(default=None, alias="varName")
    obfuscate: Optional[bool] = None
    default_value: Union[StrictBool, StrictInt, StrictFloat, StrictStr, None] = Field(
        default=None, alias="defaultValue"
    )
    optional: Optional[bool] = None
    use_constant_case: Optional[bool] = Field(default=None, alias="useConstantCase")


class ClassDeclaration(_DeclarationModel):
    class_name: str = Field(alias="class")
    path: Optional[str] = None
    require_env_file: Optional[bool] = Field(default=None, alias="requireEnvFile")
    name: Optional[str] = None
    obfuscate: bool = False
    allow_optional_fields: bool = Field(default=False, alias="allowOptionalFields")
    use_constant_case: bool = Field(default=False, alias="useConstantCase")
    fields: List[FieldDeclaration] = Field(default_factory=list)


class DeclarationDocument(_DeclarationModel):
    classes: List[ClassDeclaration]


def parse_type(text: str) -> Any:
    """Turn ``str``, ``int?`` or ``Optional[bool]`` into a Python type."""

    raw = text.strip()
    nullable = False
    if raw.endswith("?"):
        raw, nullable = raw[:-1].strip(), True
    elif raw.startswith("Optional[") and raw.endswith("]"):
        raw, nullable = raw[len("Optional[") : -1].strip(), True
    base = TYPE_NAMES.get(raw)
    if base is None:
        raise DeclarationError(
            f"Unknown field type '{text}'; expected one of {sorted(TYPE_NAMES)}"
        )
    return Optional[base] if nullable else base


def _to_env_class(declaration: ClassDeclaration) -> EnvClass:
    config = ClassConfig(
        path=declaration.path,
        require_env_file=declaration.require_env_file,
        name=declaration.name,
        obfuscate=declaration.obfuscate,
        allow_optional_fields=declaration.allow_optional_fields,
        use_constant_case=declaration.use_constant_case,
    )
    fields = tuple(
        EnvField(
            name=item.name,
            type=parse_type(item.type),
            config=FieldConfig(
                var_name=item.var_name,
                obfuscate=item.obfuscate,
                default_value=item.default_value,
                optional=item.optional,
                use_constant_case=item.use_constant_case,
            ),
        )
        for item in declaration.fields
    )
    return EnvClass(name=declaration.class_name, config=config, fields=fields)


def parse_declarations(data: Any) -> List[EnvClass]:
    """Build :class:`EnvClass` objects from a decoded declaration document."""

    if not isinstance(data, dict):
        raise DeclarationError("Declaration document must decode to an object.")
    try:
        document = DeclarationDocument.model_validate(data)
    except ValidationError as exc:
        raise DeclarationError(f"Invalid declaration document: {exc}") from exc
    return [_to_env_class(item) for item in document.classes]


def load_declarations(path: Path) -> List[EnvClass]:
    """Load class declarations from a JSON or YAML file."""

    try:
        raw = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise DeclarationError(f"Declaration file {path} is not valid UTF-8") from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise DeclarationError(f"Failed to parse declarations in {path}") from exc
    return parse_declarations(data)
