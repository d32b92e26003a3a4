"""Resume builder: content store, editor panels, preview and export."""
