from PySide6.QtWidgets import QWidget, QLabel, QLineEdit, QGridLayout
from PySide6.QtCore import Qt, QTimer, Slot
from lc3.registers import GENERAL_REGS, SPECIAL_REGS, Flag

FLAG_NAMES = {Flag.NEG: "N", Flag.ZRO: "Z", Flag.POS: "P"}


class RegisterPanel(QWidget):
    """
    8 개 GPR + PC / IR / COND 를 그리드로 표시 (읽기 전용).
    200 ms 간격 QTimer 로 값 반영.
    """
    def __init__(self, cpu, parent=None):
        super().__init__(parent)
        self.cpu = cpu
        self.edits = []

        layout = QGridLayout(self)
        names = [f"R{i}" for i in range(GENERAL_REGS)] + SPECIAL_REGS
        for row, name in enumerate(names):
            edit = QLineEdit()
            edit.setReadOnly(True)
            edit.setAlignment(Qt.AlignRight)
            edit.setObjectName(name)
            layout.addWidget(QLabel(name), row, 0)
            layout.addWidget(edit, row, 1)
            self.edits.append(edit)
        layout.setColumnStretch(1, 1)

        # 주기적 업데이트
        self.timer = QTimer(self)
        self.timer.timeout.connect(self.update_view)
        self.timer.start(200)   # ms
        self.update_view()

    @Slot()
    def update_view(self):
        """Update register display from CPU state"""
        reg = self.cpu.reg
        for i in range(GENERAL_REGS):
            self.edits[i].setText(f"x{reg[i]:04X}")
        # 특수
        pc, ir, cond = self.edits[GENERAL_REGS:]
        pc.setText(f"x{reg.pc:04X}")
        ir.setText(f"x{reg.ir:04X}")
        cond.setText(FLAG_NAMES.get(reg.cond, "?"))
