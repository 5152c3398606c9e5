"""Pure functions mapping blueprint PropertySpecs to Notion database properties.

Dispatch is a table keyed by ``PropertyType``; the import-time check below
fails loudly if a new kind is added to the enum without a translation.
"""

from collections.abc import Callable

from blueprint_hub.models.blueprint import DatabaseSpec, PropertySpec, PropertyType


def _options(spec: PropertySpec) -> list[dict]:
    return [{"name": option} for option in spec.options]


_PROPERTY_BUILDERS: dict[PropertyType, Callable[[PropertySpec], dict]] = {
    PropertyType.TITLE: lambda spec: {"title": {}},
    PropertyType.TEXT: lambda spec: {"rich_text": {}},
    PropertyType.NUMBER: lambda spec: {"number": {}},
    PropertyType.SELECT: lambda spec: {"select": {"options": _options(spec)}},
    PropertyType.MULTI_SELECT: lambda spec: {"multi_select": {"options": _options(spec)}},
    PropertyType.DATE: lambda spec: {"date": {}},
    PropertyType.CHECKBOX: lambda spec: {"checkbox": {}},
    PropertyType.URL: lambda spec: {"url": {}},
    PropertyType.EMAIL: lambda spec: {"email": {}},
    PropertyType.PHONE: lambda spec: {"phone_number": {}},
    PropertyType.STATUS: lambda spec: {"status": {}},
}

_untranslated = set(PropertyType) - set(_PROPERTY_BUILDERS)
if _untranslated:
    raise RuntimeError(f"No Notion translation for property types: {sorted(_untranslated)}")


def build_property(spec: PropertySpec) -> dict:
    """Translate one property. select/multi_select carry their options verbatim."""
    return _PROPERTY_BUILDERS[spec.type](spec)


def build_database_properties(database: DatabaseSpec) -> dict:
    """Map every property of ``database`` to the dict for databases.create(properties=...)."""
    return {name: build_property(spec) for name, spec in database.properties.items()}
