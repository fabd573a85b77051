import sys
from PySide6.QtWidgets import (QApplication, QCheckBox, QGroupBox, QLabel, QLineEdit,
                               QVBoxLayout, QWidget)
from loguru import logger

from settingsbinder import ObservableSettings, SettingsBinder, SettingsStore, setup_logging
from settingsbinder.ui import bind_widget, subscribe_widget


# --- Example Settings ---
class ExampleSettings(ObservableSettings):
    text_box: str = "Hello"
    check_box: bool = True


class ExampleForm(QWidget):
    """
    A line edit and a check box bound two-way to the settings, a label
    mirroring the text and a group box enabled by the check box.
    """
    def __init__(self, binder: SettingsBinder, store: SettingsStore = None):
        super().__init__()
        self.binder = binder
        self.store = store
        self.setWindowTitle("settingsbinder example")

        layout = QVBoxLayout(self)
        self.text_box = QLineEdit()
        self.label = QLabel()
        self.check_box = QCheckBox("Enable group")
        self.group_box = QGroupBox("Group")
        QVBoxLayout(self.group_box).addWidget(QLabel("Enabled by the check box"))

        for widget in (self.text_box, self.label, self.check_box, self.group_box):
            layout.addWidget(widget)

        bind_widget(binder, self.text_box, lambda s: s.text_box, tag=self)
        subscribe_widget(binder, self.label, "text", lambda s: s.text_box, tag=self)

        bind_widget(binder, self.check_box, lambda s: s.check_box, tag=self)
        subscribe_widget(binder, self.group_box, "enabled", lambda s: s.check_box, tag=self)

        binder.send_updates(self)

    def closeEvent(self, event):
        self.binder.remove_handlers(self)
        if self.store is not None:
            self.store.save()
        super().closeEvent(event)


def main():
    setup_logging(debug_mode=True, log_dir=None)

    app = QApplication(sys.argv)

    store = SettingsStore(ExampleSettings, "settings.json")
    binder = SettingsBinder(store.settings)

    form = ExampleForm(binder, store)
    form.show()
    logger.info("Example form shown")

    exit_code = app.exec()
    binder.close()
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
