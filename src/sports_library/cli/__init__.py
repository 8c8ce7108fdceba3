"""CLI tools for the sports library."""

from sports_library.cli.import_data import main as import_data_main
from sports_library.cli.export_data import main as export_data_main
from sports_library.cli.show_plans import main as show_plans_main

__all__ = [
    "import_data_main",
    "export_data_main",
    "show_plans_main",
]
