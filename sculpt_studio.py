import logging
import sys

from PyQt5.QtWidgets import QApplication

from SS_Libs.ImageEditingLib.sculpt_editor_window import SculptEditorWindow
from SS_Libs.config import StudioConfig


def main() -> None:
    config = StudioConfig.from_env()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    window = SculptEditorWindow(config)
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
