# -*- coding: utf-8 -*-
"""TidyCo desk entrypoint.

Intentionally minimal:
- dependency pre-check
- QApplication creation
- bootstrap (paths, logging, settings, stale drafts) inside create_main_window
- show main window
"""
import sys


def main() -> None:
    from app.deps import ensure_runtime_deps

    try:
        ensure_runtime_deps()
    except RuntimeError as exc:
        print(str(exc), file=sys.stderr)
        sys.exit(1)

    from PyQt5.QtWidgets import QApplication

    from app.controller import create_main_window
    from infra.crash_handler import install_global_exception_handlers
    from infra.logging_setup import init_logging
    from infra.settings import repair_user_space
    from ui.common import dialogs

    # Ensure unexpected exceptions are captured in logs
    init_logging()
    install_global_exception_handlers()

    app = QApplication(sys.argv)

    # Installer shortcuts / maintenance commands
    args = set(sys.argv[1:])
    if "--repair" in args:
        repair_user_space()
        dialogs.info(None, "TidyCo - Repair", "Settings were reset and stored drafts were deleted.")
        return

    window = create_main_window()
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
