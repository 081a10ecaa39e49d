from __future__ import annotations

from infragraph.ui.cli import run

run()
