"""Hook events, validation and the settings.json merge tree."""
