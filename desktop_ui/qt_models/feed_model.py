from typing import Any, List, Sequence, Tuple

from PySide6.QtCore import QAbstractListModel, QByteArray, QModelIndex, QPersistentModelIndex, Qt


class FeedModel(QAbstractListModel):
    """List model of ``(text, uri)`` rows for feed lines and citation links."""

    TextRole = Qt.ItemDataRole.UserRole + 1
    UriRole = Qt.ItemDataRole.UserRole + 2

    def __init__(self, rows: Sequence[Tuple[str, str]] = ()) -> None:
        super().__init__()
        self.rows: List[Tuple[str, str]] = list(rows)

    def rowCount(self, parent: QModelIndex | QPersistentModelIndex = QModelIndex()) -> int:
        return len(self.rows)

    def data(self, index: QModelIndex | QPersistentModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid() or index.row() >= len(self.rows):
            return None

        text, uri = self.rows[index.row()]

        if role in (self.TextRole, Qt.ItemDataRole.DisplayRole):
            return text
        elif role == self.UriRole:
            return uri

        return None

    def set_rows(self, rows: Sequence[Tuple[str, str]]) -> None:
        rows = list(rows)
        if rows == self.rows:
            return
        self.beginResetModel()
        self.rows = rows
        self.endResetModel()

    def roleNames(self) -> dict[int, QByteArray]:
        return {
            self.TextRole: QByteArray(b"text"),
            self.UriRole: QByteArray(b"uri"),
        }
