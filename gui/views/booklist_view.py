"""
Booklist view.

Master-detail layout: Authors on the left with Add/Edit/Delete actions, the
selected Author's Books on the right with an Add Book action.

Notes
-----
- Every button schedules a controller handler; the view holds no state of its
  own beyond the widgets.
- Which controller variant runs (soft or hard delete) is decided by the caller.
"""

from __future__ import annotations

from PySide6.QtWidgets import (
    QAbstractItemView,
    QGroupBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QListWidget,
    QPushButton,
    QTableWidget,
    QVBoxLayout,
    QWidget,
)

from catalog_engine.controller.booklist import BookListController
from catalog_engine.controller.ports import DialogKind
from catalog_engine.store.api import CatalogService
from gui.adapters.dialog_loader import DialogHandlers, QtDialogLoader
from gui.adapters.list_views import QtAuthorList, QtBookTable
from gui.adapters.notifier import QtNotifier
from gui.adapters.tasks import spawn


class BookListView(QWidget):
    """
    Authors and Books panel bound to a booklist controller.

    Parameters
    ----------
    service:
        Data service shared by both lists.
    controller_cls:
        BookListController or one of its variants.
    """

    def __init__(
        self,
        service: CatalogService,
        controller_cls: type[BookListController] = BookListController,
    ) -> None:
        super().__init__()

        root = QVBoxLayout(self)
        root.setContentsMargins(12, 12, 12, 12)

        panes = QHBoxLayout()
        root.addLayout(panes, 1)

        # ---------- Authors ----------
        authors_box = QGroupBox("Authors")
        authors_layout = QVBoxLayout(authors_box)
        self.author_list = QListWidget()
        self.author_list.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        authors_layout.addWidget(self.author_list, 1)

        author_buttons = QHBoxLayout()
        self.btn_add_author = QPushButton("Add…")
        self.btn_add_author.setToolTip("Create a new author.")
        self.btn_edit_author = QPushButton("Edit…")
        self.btn_edit_author.setToolTip("Edit exactly one selected author.")
        self.btn_delete_author = QPushButton("Delete")
        self.btn_delete_author.setToolTip("Delete the selected author after confirmation.")
        author_buttons.addWidget(self.btn_add_author)
        author_buttons.addWidget(self.btn_edit_author)
        author_buttons.addWidget(self.btn_delete_author)
        authors_layout.addLayout(author_buttons)
        panes.addWidget(authors_box, 1)

        # ---------- Books ----------
        books_box = QGroupBox("Books")
        books_layout = QVBoxLayout(books_box)
        self.book_table = QTableWidget()
        self.book_table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.book_table.verticalHeader().setVisible(False)
        books_layout.addWidget(self.book_table, 1)

        book_buttons = QHBoxLayout()
        book_buttons.addStretch(1)
        self.btn_add_book = QPushButton("Add Book…")
        self.btn_add_book.setToolTip("Add a book to the selected author.")
        book_buttons.addWidget(self.btn_add_book)
        books_layout.addLayout(book_buttons)
        panes.addWidget(books_box, 2)

        self.status = QLabel("")
        self.status.setStyleSheet("color: #999; padding-left: 6px;")
        root.addWidget(self.status)

        # ---------- Controller ----------
        authors = QtAuthorList(self.author_list)
        books = QtBookTable(self.book_table)
        self.book_table.horizontalHeader().setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)

        loader = QtDialogLoader(
            self,
            DialogHandlers(
                confirm={
                    DialogKind.ADD_AUTHOR: lambda: spawn(self.controller.on_add_author_confirm()),
                    DialogKind.EDIT_AUTHOR: lambda: spawn(self.controller.on_edit_author_confirm()),
                    DialogKind.ADD_BOOK: lambda: spawn(self.controller.on_add_book_confirm()),
                },
                cancel=lambda: self.controller.on_dialog_cancel(),
            ),
        )
        self.controller = controller_cls(
            service, authors, books, loader, QtNotifier(self, self.status)
        )

        self.btn_add_author.clicked.connect(lambda: spawn(self.controller.on_add_author()))
        self.btn_edit_author.clicked.connect(lambda: spawn(self.controller.on_edit_author()))
        self.btn_delete_author.clicked.connect(lambda: spawn(self.controller.on_delete_author()))
        self.btn_add_book.clicked.connect(lambda: spawn(self.controller.on_add_book()))
        self.author_list.itemSelectionChanged.connect(
            lambda: spawn(self.controller.on_author_select())
        )
        self.author_list.itemDoubleClicked.connect(
            lambda _item: spawn(self.controller.on_edit_author())
        )

    async def start(self) -> None:
        """Load the Author list."""
        await self.controller.on_init()

    def shutdown(self) -> None:
        """Tear down any dialog still loaded."""
        self.controller.dialogs.teardown_all()
