from PySide6.QtWidgets import QMainWindow, QDockWidget, QApplication
from PySide6.QtCore import Qt
from .register_panel import RegisterPanel
from .console_panel import ConsolePanel
from .control_panel import ControlPanel
from lc3.console_io import BufferedIO
from lc3.cpu_core import CPU
import sys


class MainWindow(QMainWindow):
    def __init__(self, images=()):
        super().__init__()
        self.io = BufferedIO()
        self.cpu = CPU(self.io)
        self.setWindowTitle("LC-3 Simulator")

        # 중앙 위젯: 콘솔
        self.console = ConsolePanel(self.io)
        self.setCentralWidget(self.console)

        # Dock 1 : 레지스터
        self.registers = RegisterPanel(self.cpu)
        reg_dock = QDockWidget("Registers", self)
        reg_dock.setWidget(self.registers)
        self.addDockWidget(Qt.LeftDockWidgetArea, reg_dock)

        # Dock 2 : 컨트롤
        self.controls = ControlPanel(self.cpu, self.console, images)
        self.controls.ticked.connect(self.registers.update_view)
        ctrl_dock = QDockWidget("Control", self)
        ctrl_dock.setWidget(self.controls)
        self.addDockWidget(Qt.BottomDockWidgetArea, ctrl_dock)

        self.controls.load_images()


def run(images=()):
    app = QApplication.instance() or QApplication(sys.argv[:1])
    mw = MainWindow(images)
    mw.resize(960, 640)
    mw.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(run(sys.argv[1:]))
