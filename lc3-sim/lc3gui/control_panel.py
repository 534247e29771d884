import logging

from PySide6.QtWidgets import QWidget, QPushButton, QHBoxLayout, QLabel, QFileDialog
from PySide6.QtCore import QTimer, Signal, Slot

from lc3.cpu_core import MachineState
from lc3.errors import VMError

log = logging.getLogger(__name__)

BATCH = 5000  # instructions per timer tick


class ControlPanel(QWidget):
    """
    Load / Run / Pause / Reset 버튼과 상태 레이블.
    Run 시 QTimer 로 CPU.run_for() 를 일정 개수씩 호출.
    """
    ticked = Signal()

    def __init__(self, cpu, console, images=(), parent=None):
        super().__init__(parent)
        self.cpu = cpu
        self.console = console
        self.images = list(images)

        self.btn_load  = QPushButton("Load…")
        self.btn_run   = QPushButton("Run")
        self.btn_pause = QPushButton("Pause")
        self.btn_reset = QPushButton("Reset")
        self.status    = QLabel("Stopped")

        lay = QHBoxLayout(self)
        for b in (self.btn_load, self.btn_run,
                  self.btn_pause, self.btn_reset, self.status):
            lay.addWidget(b)

        # connections
        self.btn_load.clicked.connect(self.load)
        self.btn_run.clicked.connect(self.run)
        self.btn_pause.clicked.connect(self.pause)
        self.btn_reset.clicked.connect(self.reset)

        # timer for continuous run
        self.timer = QTimer(self)
        self.timer.timeout.connect(self.tick)
        self.timer.setInterval(10)

    def load_images(self) -> bool:
        for path in self.images:
            try:
                self.cpu.load_image(path)
            except VMError as e:
                self.status.setText(f"failed to load image: {path}")
                log.error("%s", e)
                return False
        self.status.setText(f"Loaded {len(self.images)} image(s)")
        return True

    @Slot()
    def load(self):
        path, _ = QFileDialog.getOpenFileName(self, "Load LC-3 image", "",
                                              "LC-3 object (*.obj);;All files (*)")
        if not path:
            return
        self.images.append(path)
        if not self.reset():
            self.images.pop()   # keep later resets loadable

    @Slot()
    def tick(self):
        try:
            self.cpu.run_for(BATCH)
        except VMError as e:
            self.timer.stop()
            self.status.setText(str(e))
            log.error("%s", e)
        self.console.drain()
        self.ticked.emit()
        if self.cpu.state is MachineState.HALTED:
            self.timer.stop()
            self.status.setText("Halted")
        elif self.cpu.running and self.cpu.waiting_for_input():
            self.status.setText("Waiting for input")
        elif self.cpu.running:
            self.status.setText(f"Running  PC=x{self.cpu.reg.pc:04X}")

    @Slot()
    def run(self):
        if not self.cpu.running:
            return
        self.timer.start()
        self.console.setFocus()
        self.status.setText("Running")

    @Slot()
    def pause(self):
        self.timer.stop()
        self.status.setText("Paused")

    @Slot()
    def reset(self):
        self.timer.stop()
        self.cpu.reset()
        self.console.clear_screen()
        return self.load_images()
