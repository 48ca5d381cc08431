"""
YAML loader for entity definitions.

Entities whose table names come from configuration are described in a YAML
file (``Settings.entities_config`` by default)::

    entities:
      Member:
        schema: public
        columns: [id, name, group_id]
      ServiceOrder:
        connection: billing
        table: service_orders
        name_converters:
          "^serviceCode$": service_cd
        force_upper_case: true

Policy flags left out of an entry fall back to the Settings defaults.
"""

import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sql_syntax_support.config.settings import Settings, get_settings
from sql_syntax_support.core.exceptions import EntityConfigError
from sql_syntax_support.metadata.cache import ColumnMetadataCache
from sql_syntax_support.support import ColumnFetcher, SyntaxSupport
from sql_syntax_support.utils.logging import bind_context


class EntityDefinition(BaseModel):
    """Schema of one entity entry."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    connection: Optional[str] = Field(None, description="Connection name")
    schema_name: Optional[str] = Field(None, alias="schema", description="Schema name")
    table: Optional[str] = Field(None, description="Table name override")
    columns: List[str] = Field(default_factory=list, description="Explicit columns")
    name_converters: Union[Dict[str, str], List[Tuple[str, str]]] = Field(
        default_factory=dict, description="Ordered regex rewrite rules"
    )
    force_upper_case: Optional[bool] = None
    use_shortened_result_name: Optional[bool] = None
    use_snake_case_column_name: Optional[bool] = None
    delimiter_for_result_name: Optional[str] = None

    @field_validator("name_converters")
    @classmethod
    def _patterns_compile(cls, value):
        pairs = value.items() if isinstance(value, dict) else value
        for pattern, _ in pairs:
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ValueError(f"Invalid name converter pattern {pattern!r}: {exc}")
        return value


class EntitiesConfig(BaseModel):
    """Schema of the whole entities file."""

    entities: Dict[str, EntityDefinition] = Field(..., min_length=1)


def build_syntax_support(
    entity_name: str,
    definition: EntityDefinition,
    settings: Settings,
    cache: Optional[ColumnMetadataCache] = None,
    column_fetcher: Optional[ColumnFetcher] = None,
) -> SyntaxSupport:
    """Turn a validated definition into a SyntaxSupport, applying defaults."""

    def pick(value: Optional[bool], default: bool) -> bool:
        return default if value is None else value

    return SyntaxSupport(
        entity_name,
        connection_name=definition.connection or settings.default_connection_name,
        schema_name=definition.schema_name,
        table_name_override=definition.table,
        column_names=tuple(definition.columns),
        name_converters=definition.name_converters,
        force_upper_case=pick(definition.force_upper_case, settings.force_upper_case),
        use_shortened_result_name=pick(
            definition.use_shortened_result_name, settings.use_shortened_result_name
        ),
        use_snake_case_column_name=pick(
            definition.use_snake_case_column_name, settings.use_snake_case_column_name
        ),
        delimiter_for_result_name=(
            definition.delimiter_for_result_name or settings.delimiter_for_result_name
        ),
        cache=cache,
        column_fetcher=column_fetcher,
    )


def load_entity_definitions(
    path: Optional[Union[str, Path]] = None,
    settings: Optional[Settings] = None,
    cache: Optional[ColumnMetadataCache] = None,
    column_fetcher: Optional[ColumnFetcher] = None,
) -> Dict[str, SyntaxSupport]:
    """
    Load entity definitions from YAML.

    Args:
        path: YAML file; defaults to ``settings.entities_config``
        settings: Settings supplying defaults; ``get_settings()`` if omitted
        cache: Metadata cache handed to every entity
        column_fetcher: Metadata fetcher handed to every entity

    Returns:
        Mapping of entity name to SyntaxSupport, in file order

    Raises:
        EntityConfigError: If the file is missing, not valid YAML or does not
            match the schema
    """
    settings = settings or get_settings()
    config_path = Path(path or settings.entities_config)
    log = bind_context(config_path=str(config_path))

    if not config_path.exists():
        raise EntityConfigError(f"Entity configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        log.error("entity_loader.yaml_parse_error", error=str(e))
        raise EntityConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(raw_config, dict):
        raise EntityConfigError(
            f"Invalid entity configuration in {config_path}: "
            f"expected mapping, got {type(raw_config).__name__}"
        )

    try:
        config = EntitiesConfig(**raw_config)
    except ValidationError as e:
        log.error("entity_loader.validation_failed", error=str(e))
        raise EntityConfigError(
            f"Entity configuration validation failed for {config_path}: {e}"
        ) from e

    supports = {
        name: build_syntax_support(name, definition, settings, cache, column_fetcher)
        for name, definition in config.entities.items()
    }
    log.info("entity_loader.loaded", entity_count=len(supports), entities=list(supports))
    return supports
