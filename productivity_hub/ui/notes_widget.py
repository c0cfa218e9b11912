"""
Notes view — folders on the left, notes in the middle, editor on the right.
"""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Qt, Slot
from PySide6.QtWidgets import (
    QHBoxLayout, QInputDialog, QLabel, QLineEdit, QListWidget,
    QListWidgetItem, QMessageBox, QPushButton, QSplitter, QTextEdit,
    QVBoxLayout, QWidget,
)

from productivity_hub.data.repository import (
    FolderRepository, NoteRepository, TaskRepository,
)
from productivity_hub.services.note_tasks import extract_action_items

logger = logging.getLogger(__name__)

ALL_NOTES = "__all__"


class NotesWidget(QWidget):
    """Note list + editor. New notes land at the top."""

    def __init__(self, notes: NoteRepository, folders: FolderRepository,
                 tasks: TaskRepository, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.notes = notes
        self.folders = folders
        self.tasks = tasks
        self._editing_id: Optional[str] = None
        self._setup_ui()
        notes.subscribe(self.refresh_notes)
        folders.subscribe(self.refresh_folders)
        self.refresh_folders()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 20, 24, 20)

        title = QLabel("Notes")
        title.setObjectName("title")
        layout.addWidget(title)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        layout.addWidget(splitter, 1)

        # ── Folders ───────────────────────────────────────────────────
        folder_col = QWidget()
        fl = QVBoxLayout(folder_col)
        fl.setContentsMargins(0, 0, 0, 0)
        self.folder_list = QListWidget()
        self.folder_list.currentItemChanged.connect(lambda *_: self.refresh_notes())
        fl.addWidget(self.folder_list)
        new_folder = QPushButton("New folder")
        new_folder.clicked.connect(self._on_add_folder)
        fl.addWidget(new_folder)
        splitter.addWidget(folder_col)

        # ── Note list ─────────────────────────────────────────────────
        list_col = QWidget()
        ll = QVBoxLayout(list_col)
        ll.setContentsMargins(0, 0, 0, 0)
        self.note_list = QListWidget()
        self.note_list.currentItemChanged.connect(self._on_note_selected)
        ll.addWidget(self.note_list)
        new_note = QPushButton("New note")
        new_note.clicked.connect(self._on_new_note)
        ll.addWidget(new_note)
        splitter.addWidget(list_col)

        # ── Editor ────────────────────────────────────────────────────
        editor_col = QWidget()
        el = QVBoxLayout(editor_col)
        el.setContentsMargins(0, 0, 0, 0)
        self.title_input = QLineEdit()
        self.title_input.setPlaceholderText("Title")
        el.addWidget(self.title_input)
        self.content_input = QTextEdit()
        self.content_input.setPlaceholderText("Write something… '- [ ] item' lines can become tasks.")
        el.addWidget(self.content_input, 1)

        buttons = QHBoxLayout()
        save_btn = QPushButton("Save")
        save_btn.setObjectName("primary")
        save_btn.clicked.connect(self._on_save)
        tasks_btn = QPushButton("Create tasks")
        tasks_btn.clicked.connect(self._on_extract_tasks)
        delete_btn = QPushButton("Delete")
        delete_btn.setObjectName("danger")
        delete_btn.clicked.connect(self._on_delete)
        buttons.addWidget(save_btn)
        buttons.addWidget(tasks_btn)
        buttons.addStretch()
        buttons.addWidget(delete_btn)
        el.addLayout(buttons)
        splitter.addWidget(editor_col)
        splitter.setSizes([160, 240, 480])

    # ── Rendering ───────────────────────────────────────────────────────

    def _current_folder(self) -> Optional[str]:
        item = self.folder_list.currentItem()
        return item.data(Qt.ItemDataRole.UserRole) if item else ALL_NOTES

    def refresh_folders(self) -> None:
        current = self._current_folder()
        self.folder_list.blockSignals(True)
        self.folder_list.clear()
        entries = [("All notes", ALL_NOTES), ("Unfiled", None)]
        entries += [(f.name, f.id) for f in self.folders]
        selected_row = 0
        for row, (label, folder_id) in enumerate(entries):
            item = QListWidgetItem(label)
            item.setData(Qt.ItemDataRole.UserRole, folder_id)
            self.folder_list.addItem(item)
            if folder_id == current:
                selected_row = row
        self.folder_list.setCurrentRow(selected_row)
        self.folder_list.blockSignals(False)
        self.refresh_notes()

    def refresh_notes(self) -> None:
        folder = self._current_folder()
        notes = self.notes.all() if folder == ALL_NOTES else self.notes.in_folder(folder)
        self.note_list.blockSignals(True)
        self.note_list.clear()
        for note in notes:
            item = QListWidgetItem(note.title)
            item.setData(Qt.ItemDataRole.UserRole, note.id)
            self.note_list.addItem(item)
            if note.id == self._editing_id:
                self.note_list.setCurrentItem(item)
        self.note_list.blockSignals(False)

    def show_note(self, note_id: str) -> None:
        """Jump to a note from outside (quick action)."""
        self.folder_list.setCurrentRow(0)
        for row in range(self.note_list.count()):
            item = self.note_list.item(row)
            if item.data(Qt.ItemDataRole.UserRole) == note_id:
                self.note_list.setCurrentItem(item)
                self._on_note_selected(item)
                return

    # ── Actions ─────────────────────────────────────────────────────────

    @Slot()
    def _on_add_folder(self) -> None:
        name, ok = QInputDialog.getText(self, "New folder", "Folder name:")
        if ok:
            self.folders.add(name)

    @Slot()
    def _on_new_note(self) -> None:
        self._editing_id = None
        self.note_list.clearSelection()
        self.title_input.clear()
        self.content_input.clear()
        self.title_input.setFocus()

    def _on_note_selected(self, current: Optional[QListWidgetItem], _previous=None) -> None:
        if current is None:
            return
        note = self.notes.get(current.data(Qt.ItemDataRole.UserRole))
        if note is None:
            return
        self._editing_id = note.id
        self.title_input.setText(note.title)
        self.content_input.setPlainText(note.content)

    @Slot()
    def _on_save(self) -> None:
        title = self.title_input.text()
        content = self.content_input.toPlainText()
        if self._editing_id and self.notes.get(self._editing_id):
            self.notes.update(self._editing_id, title, content)
            return
        folder = self._current_folder()
        note = self.notes.add(title, content,
                              folder_id=None if folder == ALL_NOTES else folder)
        if note is None:
            QMessageBox.information(self, "Note not saved", "A note needs a title and some content.")
            return
        self._editing_id = note.id
        self.refresh_notes()

    @Slot()
    def _on_extract_tasks(self) -> None:
        items = extract_action_items(self.content_input.toPlainText())
        if not items:
            QMessageBox.information(
                self, "No action items",
                "Start lines with '- [ ]', '* ' or 'TODO:' to turn them into tasks.",
            )
            return
        created = self.tasks.add_many(items)
        logger.info("Created %d task(s) from note", len(created))
        QMessageBox.information(self, "Tasks created", f"Added {len(created)} task(s).")

    @Slot()
    def _on_delete(self) -> None:
        if not self._editing_id:
            return
        self.notes.delete(self._editing_id)
        self._on_new_note()
