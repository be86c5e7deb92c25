"""Qt user interface: tray icon, settings window and permission prompt."""
