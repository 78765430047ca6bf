import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from jsonschema import Draft202012Validator
from pydantic import BaseModel, Field
from referencing import Registry, Resource
from referencing.jsonschema import DRAFT202012

from distaudit.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

SCHEMA_FILE = "schema_org.json"
TYPES_FILE = "schema_org_types.json"
# Conditional keywords only repeat what their sub-errors already say.
IGNORED_KEYWORDS = {"if", "then", "else"}


class SchemaValidationError(BaseModel):
    schema_type: str
    message: str
    path: str = "/"
    keyword: str


class SchemaValidationResult(BaseModel):
    valid: bool = True
    errors: List[SchemaValidationError] = Field(default_factory=list)


class SchemaValidationService:
    """
    Validates JSON-LD objects against the bundled schema.org JSON Schemas.

    Schemas are addressed as 'schema:<Type>' and may reference each other;
    they are loaded into one `referencing.Registry` on first use and each
    compiled validator is cached per type. The full schema.org class list
    is bundled next to them, so a type without a structural schema is still
    known (and valid).
    """

    def __init__(self, schemas_file: Optional[Path] = None, types_file: Optional[Path] = None):
        self.schemas_file = schemas_file or PathUtils.get_schemas_dir() / SCHEMA_FILE
        self.types_file = types_file or PathUtils.get_schemas_dir() / TYPES_FILE
        self._known_types: Set[str] = set()
        self._registry: Optional[Registry] = None
        self._schemas: Dict[str, Dict[str, Any]] = {}
        self._validators: Dict[str, Draft202012Validator] = {}

    def _load(self) -> None:
        if self._registry is not None:
            return
        resources = []
        try:
            with open(self.schemas_file, "r", encoding="utf-8") as f:
                documents = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Cannot load schema.org schemas from %s: %s", self.schemas_file, e)
            documents = []

        for schema in documents:
            schema_id = schema.get("$id") if isinstance(schema, dict) else None
            if not schema_id:
                continue
            self._schemas[schema_id] = schema
            resources.append((schema_id, Resource.from_contents(schema, default_specification=DRAFT202012)))

        self._registry = Registry().with_resources(resources)
        self._known_types = self._load_type_names()
        logger.debug(
            "Loaded %d schema.org schemas, %d known types.", len(self._schemas), len(self._known_types)
        )

    def _load_type_names(self) -> Set[str]:
        try:
            with open(self.types_file, "r", encoding="utf-8") as f:
                names = json.load(f).get("types", [])
        except (OSError, json.JSONDecodeError, AttributeError) as e:
            logger.error("Cannot load schema.org type list from %s: %s", self.types_file, e)
            names = []
        return {name for name in names if isinstance(name, str) and not name.startswith("_")}

    def _get_validator(self, schema_type: str) -> Optional[Draft202012Validator]:
        self._load()
        cached = self._validators.get(schema_type)
        if cached is not None:
            return cached
        schema = self._schemas.get(f"schema:{schema_type}")
        if schema is None or schema_type.startswith("_"):
            return None
        validator = Draft202012Validator(schema, registry=self._registry)
        self._validators[schema_type] = validator
        return validator

    def has_schema_for(self, schema_type: str) -> bool:
        """True for every schema.org type, whether or not it has a structural schema."""
        if self._get_validator(schema_type) is not None:
            return True
        return schema_type in self._known_types

    def available_types(self) -> List[str]:
        self._load()
        structural = {
            schema_id.split(":", 1)[1] for schema_id in self._schemas
            if not schema_id.split(":", 1)[1].startswith("_")
        }
        return sorted(structural | self._known_types)

    def validate(self, data: Any) -> SchemaValidationResult:
        """
        Validates one JSON-LD object against every string @type it declares.
        Objects without @type, and types without a bundled schema, are valid.
        """
        if not isinstance(data, dict):
            return SchemaValidationResult()
        declared = data.get("@type")
        if not declared:
            return SchemaValidationResult()

        errors: List[SchemaValidationError] = []
        for schema_type in declared if isinstance(declared, list) else [declared]:
            if not isinstance(schema_type, str):
                continue
            validator = self._get_validator(schema_type)
            if validator is None:
                continue
            for error in validator.iter_errors(data):
                if error.validator in IGNORED_KEYWORDS:
                    continue
                pointer = "".join(f"/{part}" for part in error.absolute_path) or "/"
                errors.append(SchemaValidationError(
                    schema_type=schema_type,
                    message=error.message or "Unknown validation error",
                    path=pointer,
                    keyword=str(error.validator),
                ))

        return SchemaValidationResult(valid=not errors, errors=errors)
