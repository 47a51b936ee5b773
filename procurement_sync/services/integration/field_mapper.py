"""
ERP Field Mapper
================

Transformasi entity internal menjadi payload ERP memakai field mapping table
(internal field -> ERP field path, dotted notation untuk nested object).
"""

from typing import Any, Dict, Mapping, Optional

from ..exceptions import FieldMappingError

_MISSING = object()


class FieldMapper:
    """Schema-agnostic mapper; entity dan payload adalah plain dict"""

    def map_fields(self, entity: Dict[str, Any], mappings: Optional[Mapping[str, str]]) -> Dict[str, Any]:
        # Tanpa mapping, entity dikirim apa adanya supaya integration bisa
        # di-wire sebelum mapping dibuat
        if not mappings:
            return entity

        payload: Dict[str, Any] = {}
        for internal_field, erp_field_path in mappings.items():
            value = self._lookup(entity, internal_field)
            if value is _MISSING:
                continue
            self._assign(payload, erp_field_path, value)
        return payload

    def _lookup(self, entity: Mapping[str, Any], field: str) -> Any:
        """Literal key dulu, lalu dotted path ke nested dict"""
        if field in entity:
            return entity[field]
        if '.' not in field:
            return _MISSING

        current: Any = entity
        for part in field.split('.'):
            if not isinstance(current, Mapping) or part not in current:
                return _MISSING
            current = current[part]
        return current

    def _assign(self, payload: Dict[str, Any], erp_field_path: str, value: Any) -> None:
        parts = erp_field_path.split('.')
        if any(not part for part in parts):
            raise FieldMappingError(f"Invalid ERP field path '{erp_field_path}'", erp_field_path)

        current = payload
        for part in parts[:-1]:
            node = current.setdefault(part, {})
            if not isinstance(node, dict):
                raise FieldMappingError(
                    f"ERP field path '{erp_field_path}' collides with non-object value at '{part}'",
                    erp_field_path
                )
            current = node
        current[parts[-1]] = value
