"""
Dark stylesheet for the whole app.
Slate background with a teal accent.
"""

DARK_STYLESHEET = """
/* ── Base ────────────────────────────────────────────────────────── */
QWidget {
    background-color: #171a21;
    color: #d8dee9;
    font-family: "Inter", "Segoe UI", sans-serif;
    font-size: 13px;
}

/* ── Buttons ─────────────────────────────────────────────────────── */
QPushButton {
    background-color: #252a34;
    border: 1px solid #3b4252;
    border-radius: 6px;
    padding: 6px 14px;
    font-weight: 600;
}

QPushButton:hover {
    border-color: #58C4DD;
}

QPushButton:checked {
    background-color: #2e3440;
    border-color: #58C4DD;
    color: #58C4DD;
}

QPushButton:disabled {
    color: #4c566a;
    border-color: #252a34;
}

QPushButton#primary {
    background-color: #58C4DD;
    color: #171a21;
    border: none;
}

QPushButton#primary:hover {
    background-color: #7dd3e8;
}

QPushButton#danger {
    background-color: transparent;
    color: #e06c75;
    border: 1px solid #e06c75;
}

QPushButton#danger:hover {
    background-color: #e06c75;
    color: #171a21;
}

/* ── Inputs ──────────────────────────────────────────────────────── */
QLineEdit, QTextEdit, QPlainTextEdit, QTextBrowser,
QSpinBox, QComboBox, QDateEdit {
    background-color: #1f232c;
    border: 1px solid #3b4252;
    border-radius: 6px;
    padding: 5px 8px;
    selection-background-color: #58C4DD;
    selection-color: #171a21;
}

QLineEdit:focus, QTextEdit:focus, QPlainTextEdit:focus {
    border-color: #58C4DD;
}

/* ── Lists & sidebar ─────────────────────────────────────────────── */
QListWidget {
    background-color: #1f232c;
    border: none;
    border-radius: 6px;
    outline: none;
}

QListWidget::item {
    padding: 7px 10px;
    border-radius: 4px;
}

QListWidget::item:selected {
    background-color: #2e3440;
    color: #58C4DD;
}

QGroupBox {
    border: 1px solid #2e3440;
    border-radius: 8px;
    margin-top: 14px;
    padding: 12px 10px 10px 10px;
    font-weight: 600;
}

QGroupBox::title {
    subcontrol-origin: margin;
    left: 10px;
    padding: 0 4px;
    color: #8fbcbb;
}

QProgressBar {
    background-color: #252a34;
    border: none;
    border-radius: 4px;
    height: 8px;
    text-align: center;
}

QProgressBar::chunk {
    background-color: #58C4DD;
    border-radius: 4px;
}

QScrollArea {
    border: none;
}

/* ── Labels ──────────────────────────────────────────────────────── */
QLabel#title {
    font-size: 22px;
    font-weight: 700;
    color: #eceff4;
}

QLabel#subtitle {
    font-size: 12px;
    color: #81a1c1;
}

QLabel#state_label {
    font-size: 16px;
    font-weight: 600;
    color: #8fbcbb;
}

QLabel#timer {
    font-size: 64px;
    font-weight: 300;
    font-family: "JetBrains Mono", "Consolas", monospace;
    color: #eceff4;
}
"""
