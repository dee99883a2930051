"""Host integrations for the editor."""
