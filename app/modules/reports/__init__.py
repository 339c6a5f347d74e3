"""Reports module: report configuration validation, patching and updates."""
