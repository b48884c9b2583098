"""configuration, dispatch and rendering core."""
