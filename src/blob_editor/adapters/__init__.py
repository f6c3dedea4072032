"""Front-end adapters hosting an editor session."""
