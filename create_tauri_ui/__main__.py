import sys

from create_tauri_ui.cli import main

sys.exit(main())
