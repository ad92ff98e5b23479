"""
DataTable for displaying one page of records
"""

from typing import Any, List, Optional, Sequence

from rich.text import Text
from textual.message import Message
from textual.widgets import DataTable
from textual.widgets.data_table import CellDoesNotExist


class RecordTable(DataTable):
    """
    DataTable that keys rows by their index on the current page and
    re-emits selection with that index.
    """

    class RowChosen(Message):
        """Row selected (Enter / click) message"""
        def __init__(self, index: int) -> None:
            super().__init__()
            self.index = index

    def __init__(
        self,
        *,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.cursor_type = "row"
        self.zebra_stripes = True

    def on_mount(self) -> None:
        self.add_class("records-table")

    def set_rows(self, rows: Sequence[List[str]], empty_message: str = "No records found.") -> None:
        """Replace all rows; shows a single placeholder row when empty."""
        self.clear()
        if not rows:
            placeholder = [Text(empty_message, style="italic dim")] + [""] * (len(self.columns) - 1)
            self.add_row(*placeholder, key="empty")
            return
        for idx, row in enumerate(rows):
            self.add_row(*row, key=str(idx))

    @property
    def current_index(self) -> Optional[int]:
        """Index (on the current page) of the row under the cursor."""
        if self.row_count == 0:
            return None
        try:
            key = self.coordinate_to_cell_key(self.cursor_coordinate).row_key
        except CellDoesNotExist:
            return None
        return self._index_from_key(key)

    @staticmethod
    def _index_from_key(key: Any) -> Optional[int]:
        value = getattr(key, "value", key)
        if value is None or not str(value).isdigit():
            return None
        return int(value)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        index = self._index_from_key(event.row_key)
        if index is not None:
            self.post_message(self.RowChosen(index))
