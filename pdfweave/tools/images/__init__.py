"""Image composition tool plugin."""
