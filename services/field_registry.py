# ------------------------------
# Module: field_registry.py
# Description: Holds the ordered set of field names to generate.
# ------------------------------

import logging
from typing import Iterable, Union, Dict, Optional

from services.data_model import Field, FieldSet, InferredType

logger = logging.getLogger(__name__)


def _to_field(item: Union[str, Field]) -> Optional[Field]:
    if isinstance(item, Field):
        name = item.name.strip()
        return Field(name=name, inferred_type=item.inferred_type) if name else None
    name = str(item).strip()
    return Field(name=name) if name else None


def dedupe_fields(items: Iterable[Union[str, Field]]) -> FieldSet:
    '''
      Build a FieldSet from names or Field objects.
      Duplicates (exact, case-sensitive) collapse to the first occurrence.
      Blank names are dropped.
    '''
    seen: Dict[str, Field] = {}
    for item in items:
        the_field = _to_field(item)
        if the_field is None or the_field.name in seen:
            continue
        seen[the_field.name] = the_field
    return FieldSet(fields=tuple(seen.values()))


class FieldRegistry:
    """Current field selection of one session."""

    def __init__(self):
        self._field_set = FieldSet()

    @property
    def field_set(self) -> FieldSet:
        return self._field_set

    @property
    def names(self):
        return self._field_set.names

    def set_fields(self, items: Iterable[Union[str, Field]]) -> FieldSet:
        '''
          Replace the whole selection. Not additive.
          Known inferred types are kept for names that stay selected.
        '''
        known_types = {f.name: f.inferred_type for f in self._field_set}
        new_set = dedupe_fields(items)
        self._field_set = FieldSet(fields=tuple(
            f if f.inferred_type is not None else Field(f.name, known_types.get(f.name))
            for f in new_set
        ))
        logger.debug(f"Field selection replaced: {self._field_set.names}")
        return self._field_set

    def clear(self) -> FieldSet:
        self._field_set = FieldSet()
        logger.debug("Field selection cleared")
        return self._field_set

    def types_by_name(self) -> Dict[str, Optional[InferredType]]:
        return {f.name: f.inferred_type for f in self._field_set}
