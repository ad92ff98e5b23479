# warehouse_admin/services/resource_service.py
"""
Business-logic layer for one backend collection.  Works with domain models
and the Page container.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence

from warehouse_admin.api.resources import ResourceApi
from warehouse_admin.errors import ValidationError
from warehouse_admin.models.pagination import Page
from warehouse_admin.resources import FormField, ResourceDefinition
from simple_logger import Slogger

# keys of one order/purchase line and the labels used in error messages
LINE_FIELDS = (("productId", "Product"), ("unitId", "Unit"), ("quantity", "Quantity"))


class ResourceService:
    """Handles list / detail / create / update / delete for one resource."""

    def __init__(
        self,
        definition: ResourceDefinition,
        api: ResourceApi,
        *,
        default_page_size: int = 10,
    ) -> None:
        self.definition = definition
        self._api = api
        self._per_page = default_page_size

    # --------------------------------------------------------------------- #
    # read side
    # --------------------------------------------------------------------- #

    def page(self, *, page: int = 1, per_page: int | None = None) -> Page[Any]:
        """Return one Page of models; `page` is 1-based."""
        per_page = per_page or self._per_page
        payload = self._api.list(page=page, size=per_page)
        items = [self.definition.parse(doc) for doc in payload.items]

        total = payload.count
        if total is None:
            if self.definition.has_count_endpoint:
                total = self._api.count()
            else:
                # bare list endpoints only ever tell us what they returned
                total = len(items)

        # a lagging count can't be lower than what we are looking at
        seen = (page - 1) * per_page + len(items)
        if items and total < seen:
            Slogger.warning(
                f"{self.definition.key}: server count {total} behind {seen} visible rows",
                {"resource": self.definition.key, "page": page, "per_page": per_page},
            )
            total = seen

        return Page(items=items, total=total, page=page, per_page=per_page)

    def by_id(self, record_id: int) -> Any:
        return self.definition.parse(self._api.get(record_id))

    def search(self, name: str, *, page: int = 1, per_page: int = 3) -> List[Any]:
        """Records whose name matches `name`, used to pick ids in forms."""
        payload = self._api.search(name, page=page, size=per_page)
        return [self.definition.parse(doc) for doc in payload.items]

    # --------------------------------------------------------------------- #
    # write side
    # --------------------------------------------------------------------- #

    def add(self, values: Mapping[str, Any], lines: Optional[Sequence[Mapping[str, Any]]] = None) -> Any:
        if self.definition.line_items is not None and lines is None:
            lines = ()
        data = self.prepare(values, lines)
        Slogger.info(f"Creating {self.definition.key} record", {"resource": self.definition.key})
        return self._api.create(data)

    def update(
        self,
        record_id: int,
        values: Mapping[str, Any],
        lines: Optional[Sequence[Mapping[str, Any]]] = None,
    ) -> Any:
        """Without `lines` the record's existing lines are left as they are."""
        data = self.prepare(values, lines)
        Slogger.info(
            f"Updating {self.definition.key} record",
            {"resource": self.definition.key, "id": record_id},
        )
        return self._api.update(record_id, data)

    def delete(self, record_id: int) -> None:
        Slogger.info(
            f"Deleting {self.definition.key} record",
            {"resource": self.definition.key, "id": record_id},
        )
        self._api.delete(record_id)

    # ------------------------------------------------------------------ #
    # helpers
    # ------------------------------------------------------------------ #

    def prepare(
        self,
        values: Mapping[str, Any],
        lines: Optional[Sequence[Mapping[str, Any]]] = None,
    ) -> Dict[str, Any]:
        """
        Check required fields and coerce form strings into request values.

        Blank optional fields are left out of the payload. For orders and
        purchases, `lines` become the item list under the definition's
        payload key; at least one line is needed when they are given.
        """
        missing = [
            f.label for f in self.definition.form_fields
            if f.required and not str(values.get(f.name) or "").strip()
        ]
        if missing:
            raise ValidationError(f"Required: {', '.join(missing)}", fields=missing)

        data: Dict[str, Any] = {}
        bad: List[str] = []
        for f in self.definition.form_fields:
            raw = str(values.get(f.name) or "").strip()
            if not raw:
                continue
            converted = self._convert(f, raw)
            if converted is None:
                bad.append(f.label)
            else:
                data[f.name] = converted

        if bad:
            raise ValidationError(f"Invalid value for: {', '.join(bad)}", fields=bad)

        line_items = self.definition.line_items
        if line_items is not None and lines is not None:
            if not lines:
                raise ValidationError(
                    f"{line_items.label}: add at least one line", fields=[line_items.label]
                )
            data[line_items.payload_key] = [self.prepare_line(line) for line in lines]
        return data

    def prepare_line(self, line: Mapping[str, Any]) -> Dict[str, int]:
        """One line as `{productId, unitId, quantity}`, all positive integers."""
        item: Dict[str, int] = {}
        bad: List[str] = []
        for key, label in LINE_FIELDS:
            try:
                value = int(str(line.get(key) or "").strip())
            except ValueError:
                value = 0
            if value <= 0:
                bad.append(label)
            else:
                item[key] = value
        if bad:
            raise ValidationError(f"Line needs a valid {', '.join(bad).lower()}", fields=bad)
        return item

    @staticmethod
    def _convert(form_field: FormField, raw: str) -> Optional[Any]:
        if form_field.kind == "int":
            try:
                return int(raw)
            except ValueError:
                return None
        if form_field.kind == "date":
            try:
                return datetime.strptime(raw, "%Y-%m-%d").date().isoformat()
            except ValueError:
                return None
        return raw
