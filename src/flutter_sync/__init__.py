"""Keep the installed Flutter SDK in sync with a project."""
