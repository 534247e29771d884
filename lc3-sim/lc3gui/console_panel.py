from PySide6.QtCore import Qt
from PySide6.QtGui import QFontDatabase, QTextCursor
from PySide6.QtWidgets import QPlainTextEdit


class ConsolePanel(QPlainTextEdit):
    """
    LC-3 콘솔 화면. 게스트 출력은 BufferedIO 에서 가져와 표시하고,
    키 입력은 같은 BufferedIO 큐에 넣는다.
    """
    def __init__(self, io, parent=None):
        super().__init__(parent)
        self.io = io
        self.setReadOnly(True)
        self.setFont(QFontDatabase.systemFont(QFontDatabase.FixedFont))
        self.setFocusPolicy(Qt.StrongFocus)
        self.setPlaceholderText("Console output. Click here and type to send keys.")

    def keyPressEvent(self, event):
        text = event.text()
        if not text:
            return super().keyPressEvent(event)
        # LC-3 programs expect LF for Enter
        self.io.feed(text.replace("\r", "\n").encode("latin-1", errors="replace"))

    def drain(self):
        """Move pending guest output into the view."""
        text = self.io.take_output()
        if not text:
            return
        self.moveCursor(QTextCursor.End)
        self.insertPlainText(text)
        self.moveCursor(QTextCursor.End)

    def clear_screen(self):
        self.io.take_output()
        self.clear()
