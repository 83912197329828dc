"""Watermark removal tool plugin."""
