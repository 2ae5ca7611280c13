"""Infrastructure layer: attribute slot patching."""
